"""
アプリケーションのエントリーポイント
"""
from dataclasses import replace
from typing import Optional

from click import ClickException, Path, argument, echo, group, option
from tomlkit.exceptions import ParseError

from table_blueprint import Logger, TableDeclaration
from table_blueprint.config import load_config
from table_blueprint.definitions import parse_toml, render_all
from table_blueprint.status.errors import BlueprintError



@group()
def main() -> None:
    """
    Render CREATE TABLE statements from TOML table definitions.
    """


def _load(definitions:str, config_path:Optional[str], strict:bool) -> list[TableDeclaration]:
    """定義ファイルを読み込み、TableDeclaration のリストを返す

    config_path が指定されない場合は定義ファイル内の [blueprint] テーブルを設定として使用する
    """
    try:
        config = load_config(config_path or definitions)
        if strict:
            config = replace(config, strict=True)
        return parse_toml(definitions, config, Logger.from_config(config))
    except BlueprintError as e:
        raise ClickException(str(e)) from e
    except ParseError as e:
        raise ClickException(f"Invalid TOML: {e}") from e


@main.command()
@argument("definitions", type=Path(exists=True, dir_okay=False))
@option("--config", "config_path", type=Path(exists=True, dir_okay=False),
        help="TOML file with a [blueprint] table. "
             "Defaults to the [blueprint] table of DEFINITIONS.")
@option("--table", "table_names", multiple=True,
        help="Render only this table. Can be given several times.")
@option("--strict", is_flag=True, help="Fail on input that would be accepted silently.")
def render(definitions:str, config_path:Optional[str],
           table_names:tuple[str, ...], strict:bool) -> None:
    """
    Print the CREATE TABLE statements of DEFINITIONS.
    """
    tables = _load(definitions, config_path, strict)

    if table_names:
        known = {t.table_name for t in tables}
        if missing := [n for n in table_names if n not in known]:
            raise ClickException(f"Unknown table(s): {', '.join(missing)}")
        tables = [t for t in tables if t.table_name in table_names]

    echo(render_all(tables))


@main.command()
@argument("definitions", type=Path(exists=True, dir_okay=False))
def tables(definitions:str) -> None:
    """
    List the tables declared in DEFINITIONS.
    """
    for table in _load(definitions, None, False):
        echo(f"{table.table_name} ({len(table.columns)} columns)")



if __name__ == "__main__":
    main()
