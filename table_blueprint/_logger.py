"""
ログ出力モジュール

Classes
-------
- `Logger` : ロガー
"""
import datetime
from os import path, makedirs
from typing import Optional

from table_blueprint.config import BlueprintConfig, LogLevel, MAX_LOG_LEVEL_LENGTH



class Logger:
    """ロガー"""
    def __init__(self, default_log_path:Optional[str]=None):
        """ロガーの初期化

        Parameters
        ----------
        default_log_path : str | None
            ログファイルのデフォルトのパス
            .init_logger()で指定されたパスが不正な場合に使用する。
            None の場合、パスが不正であればファイルには出力しない。
        """
        self._path: Optional[str] = None
        self._encoding = "utf-8"
        self._logging_to_console = False
        self._level = LogLevel.WARNING
        self._default_log_path = default_log_path

    @classmethod
    def from_config(cls, config:BlueprintConfig) -> "Logger":
        """設定からロガーを生成する

        Parameters
        ----------
        config : BlueprintConfig
            設定

        Returns
        -------
        Logger
            ロガー
            config.log_path が None の場合、ファイルには出力しない
        """
        logger = cls()
        logger.init_logger(config.log_path,
                           logging_to_console=config.logging_to_console,
                           level=config.log_level)
        return logger

    def init_logger(self, log_path:Optional[str], encoding:str="utf-8",
                    init_log:bool=False, logging_to_console:bool=False,
                    level:LogLevel=LogLevel.WARNING) -> bool:
        """ロガーの初期化

        Parameters
        ----------
        log_path : str | None
            ログファイルのパス
            None の場合、ファイルには出力しない
        encoding : str, default "utf-8"
            ログファイルのエンコーディング
        init_log : bool, default False
            ログファイルを初期化するかどうか
        logging_to_console : bool, default False
            コンソールにもログを出力するかどうか
        level : LogLevel, default LogLevel.WARNING
            出力するログの最低レベル

        Returns
        -------
        bool
            指定されたパスでのログファイルの初期化が成功したかどうか
        """
        self._encoding = encoding
        self._logging_to_console = logging_to_console
        self._level = level

        if log_path is None:
            self._path = None
            return True

        try:
            # ログファイルのディレクトリが存在しない場合は作成
            log_dir = path.dirname(log_path)
            if log_dir and not path.exists(log_dir):
                makedirs(log_dir)
        except OSError:
            # アクセス権限がない場合などはデフォルトのログファイルパスを使用
            self._path = self._default_log_path
            return False

        if init_log and path.exists(log_path):
            # ログファイルを初期化
            with open(log_path, "w", encoding=encoding) as f:
                f.write("")

        self._path = log_path
        return True

    @property
    def log_path(self) -> Optional[str]:
        """ログファイルのパス"""
        return self._path

    def log(self, table_name:str, message:str,
            level:LogLevel=LogLevel.INFO) -> bool:
        """ログの出力

        Parameters
        ----------
        table_name : str
            対象のテーブル名
        message : str
            ログメッセージ
        level : LogLevel, default LogLevel.INFO
            ログのレベル

        Returns
        -------
        bool
            ログの出力が成功したかどうか
            最低レベル未満のためにスキップした場合も True を返す
        """
        if level.value < self._level.value:
            return True
        if self._path is None and not self._logging_to_console:
            return False

        text = (f"[{level.name}]".ljust(MAX_LOG_LEVEL_LENGTH+3)
               + f"{datetime.datetime.now().strftime('%Y/%m/%d %H:%M:%S')}, "
               + f"{table_name}, "
               + message)

        if self._logging_to_console:
            print(text)

        if self._path is None:
            return True

        try:
            with open(self._path, "a", encoding=self._encoding) as f:
                f.write(text + "\n")
        except OSError:
            return False

        return True
