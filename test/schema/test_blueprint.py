"""TableDeclarationのテスト"""
import pytest

from table_blueprint.config import BlueprintConfig
from table_blueprint.schema import (
    TableDeclaration, ConstraintKeying, Constraint, ConstraintKind
)
from table_blueprint.status import errors as be
from table_blueprint.status import warnings as bw



#
# テストフィクスチャ等 （共通の設定やデータ）
#

@pytest.fixture
def users() -> TableDeclaration:
    """usersテーブルの宣言を返すfixture"""
    return (TableDeclaration("users")
            .int("id").auto_increment().primary()
            .string("name", 100).not_null()
            .enum("role", ["admin", "user"])
            .unique("name"))

USERS_SQL = (
    "CREATE TABLE IF NOT EXISTS `users` (\n"
    "\t`id` INT(11) AUTO_INCREMENT PRIMARY KEY, \n"
    "\t`name` VARCHAR(100) NOT NULL, \n"
    "\t`role` ENUM('admin', 'user'), \n"
    "\tUNIQUE (`name`)\n"
    ");"
)



#
# 出力全体のテスト
#

def test_render_users(users) -> None:
    """カラム・カラム制約・テーブル制約を含む宣言の出力をテストする。"""
    assert users.render() == USERS_SQL
    assert str(users) == USERS_SQL

def test_render_is_repeatable(users) -> None:
    """複数回出力しても結果が変わらない（内部状態を変更しない）ことをテストする。"""
    first = users.render()
    assert users.render() == first
    assert users.columns.keys() == {"id", "name", "role"}
    assert len(users.constraints) == 1

@pytest.mark.parametrize("if_not_exists, expected", [
    (True, "CREATE TABLE IF NOT EXISTS `empty` (\n\n);"),
    (False, "CREATE TABLE `empty` (\n\n);"),
])
def test_render_no_columns(if_not_exists, expected) -> None:
    """カラムが一つもない場合の出力をテストする。"""
    assert TableDeclaration("empty", if_not_exists).render() == expected

def test_render_constraints_without_columns() -> None:
    """カラムがなくテーブル制約のみが存在する場合、カンマ区切りの後に制約が続くことをテストする。"""
    table = TableDeclaration("t").primary(["a", "b"])
    assert table.render() == "CREATE TABLE IF NOT EXISTS `t` (\n, \n\tPRIMARY KEY (`a`, `b`)\n);"

def test_render_no_constraint_section() -> None:
    """テーブル制約がない場合、末尾にカンマが付かないことをテストする。"""
    table = TableDeclaration("t").json("data")
    assert table.render() == "CREATE TABLE IF NOT EXISTS `t` (\n\t`data` JSON\n);"

def test_columns_returns_copy() -> None:
    """columnsの戻り値を変更しても宣言に影響しないことをテストする。"""
    table = TableDeclaration("t").int("a")
    table.columns["a"].constraints.append(Constraint(ConstraintKind.NOT_NULL))
    assert table.columns["a"].constraints == []
    assert table.render() == "CREATE TABLE IF NOT EXISTS `t` (\n\t`a` INT(11)\n);"

def test_properties() -> None:
    """コンストラクタで指定した値の取得をテストする。"""
    table = TableDeclaration("logs", False)
    assert table.table_name == "logs"
    assert table.if_not_exists is False
    assert table.most_recent_column is None
    assert table.columns == {}
    assert table.constraints == []
    assert table.warnings == []



#
# カラム型のテスト
#

@pytest.mark.parametrize("declare, expected", [
    (lambda t: t.string("c"), "`c` VARCHAR(50)"),
    (lambda t: t.string("c", 255), "`c` VARCHAR(255)"),
    (lambda t: t.int("c"), "`c` INT(11)"),
    (lambda t: t.int("c", 4), "`c` INT(4)"),
    (lambda t: t.text("c"), "`c` TEXT(65535)"),
    (lambda t: t.text("c", 1000), "`c` TEXT(1000)"),
    (lambda t: t.json("c"), "`c` JSON"),
    (lambda t: t.enum("c", ["a"]), "`c` ENUM('a')"),
    (lambda t: t.enum("c", ["a", "b", "c"]), "`c` ENUM('a', 'b', 'c')"),
    (lambda t: t.timestamp("c"), "`c` TIMESTAMP"),
    (lambda t: t.timestamp("c", 6), "`c` TIMESTAMP(6)"),
    (lambda t: t.decimal("c", 10), "`c` DECIMAL"),
    (lambda t: t.decimal("c", 10, 2), "`c` DECIMAL"),
])
def test_column_types(declare, expected) -> None:
    """各カラム型の出力をテストする。

    DECIMALは長さ・小数桁数を受け取るが、既定では出力に含めない。
    """
    table = declare(TableDeclaration("t"))
    assert table.render() == f"CREATE TABLE IF NOT EXISTS `t` (\n\t{expected}\n);"

def test_enum_values_are_not_escaped() -> None:
    """ENUMの値がエスケープされずにそのまま出力されることをテストする。"""
    table = TableDeclaration("t").enum("c", ["it's"])
    assert "`c` ENUM('it's')" in table.render()

@pytest.mark.parametrize("length, decimals, expected", [
    (10, None, "DECIMAL(10)"),
    (10, 2, "DECIMAL(10, 2)"),
])
def test_decimal_parameters(length, decimals, expected) -> None:
    """decimal_parametersを有効にした場合、DECIMALの引数が出力されることをテストする。"""
    config = BlueprintConfig(decimal_parameters=True)
    table = TableDeclaration("t", config=config).decimal("price", length, decimals)
    assert f"`price` {expected}" in table.render()

def test_default_lengths_from_config() -> None:
    """設定で指定した既定の長さが使用されることをテストする。"""
    config = BlueprintConfig(default_string_length=255, default_int_length=10,
                             default_text_length=1024)
    table = TableDeclaration("t", config=config).string("a").int("b").text("c")
    sql = table.render()
    assert "`a` VARCHAR(255)" in sql
    assert "`b` INT(10)" in sql
    assert "`c` TEXT(1024)" in sql

def test_redeclare_column() -> None:
    """同名のカラムを再宣言した場合、型と制約が置き換えられ、位置は維持されることをテストする。"""
    table = (TableDeclaration("t")
             .int("a").not_null()
             .string("b")
             .text("a"))
    assert table.render() == "CREATE TABLE IF NOT EXISTS `t` (\n" \
                             "\t`a` TEXT(65535), \n" \
                             "\t`b` VARCHAR(50)\n" \
                             ");"
    assert table.most_recent_column == "a"

    assert len(table.warnings) == 1
    warning = table.warnings[0]
    assert isinstance(warning, bw.ColumnRedeclaredWarning)
    assert warning.old_fragment == "INT(11) NOT NULL"
    assert warning.new_fragment == "TEXT(65535)"



#
# 制約のテスト
#

@pytest.mark.parametrize("method, expected", [
    ("not_null", "NOT NULL"),
    ("null", "NULL"),
    ("primary", "PRIMARY KEY"),
    ("unique", "UNIQUE"),
    ("auto_increment", "AUTO_INCREMENT"),
    ("index", "INDEX"),
    ("unsigned", "UNSIGNED"),
])
def test_column_constraints(method, expected) -> None:
    """列名を指定しない制約が直前のカラムに付与されることをテストする。"""
    table = getattr(TableDeclaration("t").int("a"), method)()
    assert f"\t`a` INT(11) {expected}\n" in table.render()

@pytest.mark.parametrize("method, expected", [
    ("not_null", "NOT NULL"),
    ("primary", "PRIMARY KEY"),
    ("index", "INDEX"),
])
def test_table_constraints(method, expected) -> None:
    """列名を指定した制約がテーブル制約として別の行に出力されることをテストする。"""
    table = getattr(TableDeclaration("t").int("a"), method)("a")
    assert table.render() == "CREATE TABLE IF NOT EXISTS `t` (\n" \
                             "\t`a` INT(11), \n" \
                             f"\t{expected} (`a`)\n" \
                             ");"

def test_default_constraint() -> None:
    """DEFAULT制約の値がそのまま出力されることをテストする。"""
    table = (TableDeclaration("t")
             .int("a").default(0)
             .string("b").default("'none'")
             .default("1", ["c", "d"]))
    sql = table.render()
    assert "\t`a` INT(11) DEFAULT(0), \n" in sql
    assert "\t`b` VARCHAR(50) DEFAULT('none'), \n" in sql
    assert "\tDEFAULT(1) (`c`, `d`)\n" in sql

def test_constraints_in_call_order() -> None:
    """連続した制約が呼び出し順に同じカラムに付与されることをテストする。"""
    table = TableDeclaration("t").int("a").unsigned().not_null().default(1)
    assert "`a` INT(11) UNSIGNED NOT NULL DEFAULT(1)" in table.render()

def test_constraint_follows_most_recent_column() -> None:
    """制約が最後に宣言されたカラムに付与されることをテストする。"""
    table = TableDeclaration("t").int("a").int("b").not_null()
    sql = table.render()
    assert "\t`a` INT(11), \n" in sql
    assert "\t`b` INT(11) NOT NULL\n" in sql

def test_table_constraint_for_undeclared_column() -> None:
    """未宣言のカラムを指定したテーブル制約もそのまま出力されることをテストする。"""
    table = TableDeclaration("t").int("a").unique(["x", "y"])
    assert "\tUNIQUE (`x`, `y`)\n" in table.render()
    # テーブル制約は直前のカラムには付与されない
    assert "\t`a` INT(11), \n" in table.render()

def test_table_constraint_with_tuple() -> None:
    """列名をタプルで指定できることをテストする。"""
    table = TableDeclaration("t").int("a").index(("a", "b"))
    assert table.constraints[0].column_names == ("a", "b")
    assert "\tINDEX (`a`, `b`)\n" in table.render()

def test_dangling_constraint() -> None:
    """カラム宣言前の列名なし制約が無視され、警告が記録されることをテストする。"""
    table = TableDeclaration("t").not_null().int("a")
    assert table.render() == "CREATE TABLE IF NOT EXISTS `t` (\n\t`a` INT(11)\n);"
    assert len(table.warnings) == 1
    assert isinstance(table.warnings[0], bw.DanglingConstraintWarning)
    assert table.warnings[0].constraint_text == "NOT NULL"

def test_constraint_collision() -> None:
    """同じ文字列となるテーブル制約が後のものに上書きされることをテストする。

    上書きされた制約は最初に宣言された位置に出力される。
    """
    table = (TableDeclaration("t")
             .int("a").int("b")
             .unique("a")
             .index("b")
             .unique(["a", "b"]))
    sql = table.render()
    assert sql.endswith("\tUNIQUE (`a`, `b`), \n\tINDEX (`b`)\n);")
    assert "UNIQUE (`a`)" not in sql
    assert isinstance(table.warnings[-1], bw.ConstraintOverwrittenWarning)

def test_constraint_sequence_keying() -> None:
    """SEQUENCEの場合、同じ文字列のテーブル制約が両方出力されることをテストする。"""
    config = BlueprintConfig(constraint_keying=ConstraintKeying.SEQUENCE)
    table = (TableDeclaration("t", config=config)
             .int("a").int("b")
             .unique("a")
             .unique("b"))
    assert table.render().endswith("\tUNIQUE (`a`), \n\tUNIQUE (`b`)\n);")
    assert table.warnings == []



#
# 厳格モードのテスト
#

@pytest.fixture
def strict() -> BlueprintConfig:
    """厳格モードの設定を返すfixture"""
    return BlueprintConfig(strict=True)

def test_permissive_by_default() -> None:
    """既定では不正な入力でも例外を送出しないことをテストする。"""
    table = (TableDeclaration("")
             .not_null()
             .enum("e", [])
             .string("s", -1))
    assert table.render() == "CREATE TABLE IF NOT EXISTS `` (\n" \
                             "\t`e` ENUM(''), \n" \
                             "\t`s` VARCHAR(-1)\n" \
                             ");"

def test_strict_empty_table_name(strict) -> None:
    """厳格モードで空のテーブル名が拒否されることをテストする。"""
    with pytest.raises(be.EmptyTableNameError):
        TableDeclaration("", config=strict)

def test_strict_empty_enum_values(strict) -> None:
    """厳格モードで値のないENUMが拒否されることをテストする。"""
    with pytest.raises(be.EmptyEnumValuesError) as exc_info:
        TableDeclaration("t", config=strict).enum("role", [])
    assert exc_info.value.column_name == "role"
    assert str(exc_info.value) == "t: ENUM column 'role' needs at least one value."

@pytest.mark.parametrize("declare", [
    lambda t: t.string("c", -1),
    lambda t: t.int("c", -1),
    lambda t: t.text("c", -1),
    lambda t: t.timestamp("c", -1),
    lambda t: t.decimal("c", -1),
    lambda t: t.decimal("c", 10, -1),
])
def test_strict_negative_length(strict, declare) -> None:
    """厳格モードで負の長さが拒否されることをテストする。"""
    with pytest.raises(be.NegativeLengthError):
        declare(TableDeclaration("t", config=strict))

def test_strict_dangling_constraint(strict) -> None:
    """厳格モードでカラム宣言前の列名なし制約が拒否されることをテストする。"""
    with pytest.raises(be.DanglingConstraintError):
        TableDeclaration("t", config=strict).primary()

def test_strict_valid_input(strict, users) -> None:
    """厳格モードでも正しい入力は同じ結果になることをテストする。"""
    table = (TableDeclaration("users", config=strict)
             .int("id").auto_increment().primary()
             .string("name", 100).not_null()
             .enum("role", ["admin", "user"])
             .unique("name"))
    assert table.render() == users.render()

def test_errors_are_value_errors(strict) -> None:
    """BlueprintErrorがValueErrorとして捕捉できることをテストする。"""
    with pytest.raises(ValueError):
        TableDeclaration("", config=strict)
