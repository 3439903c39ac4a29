import sys
import os

# 添加仓库根目录到sys.path，以便以脚本方式运行
sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))

from meta_tree.typedef.meta_tree_data_types import Tree, Record, Section, Field, MAIN_SECTION_NAME
from meta_tree.typedef.verb_types import VerbKind
from meta_tree.typedef.exception_types import ValidationError, DuplicateNameError, FormatError
from meta_tree.run_time_cfg.meta_tree_cfg import get_instance as get_meta_tree_cfg


def test_field_attributes():
    """测试字段属性操作"""
    print("测试 field_attributes ...")

    field = Field("age")
    field.set_attribute("min", 0)
    field.set_attribute("max", 150.5)
    field.set_attribute("required")
    field.set_attribute("label", "")

    assert field.get_attribute("min") == "0", "数值属性应转换为字符串"
    assert field.get_attribute("max") == "150.5", "浮点属性应转换为字符串"
    assert field.get_attribute("required") is None, "标记属性的值应为None"
    assert field.has_attribute("required"), "标记属性应存在"
    assert field.get_attribute("label") is None, "空字符串属性通过get_attribute读取应为None"
    assert field.has_attribute("label")
    assert field.get_attribute("missing") is None
    assert not field.has_attribute("missing")

    assert [name for name, _ in field.list_attributes()] == ["min", "max", "required", "label"], "属性应保持插入顺序"

    field.set_attribute("min", "1")
    assert [name for name, _ in field.list_attributes()] == ["min", "max", "required", "label"], "覆盖属性不应改变顺序"
    assert field.get_attribute("min") == "1"

    field.delete_attribute("max")
    field.delete_attribute("not_there")
    assert not field.has_attribute("max")
    print("  ✓ 字段属性操作正确")


def test_field_name_validation():
    """测试字段名校验"""
    print("测试 field_name_validation ...")

    for bad_name in ["", "has space", "tab\tname", "my-field", "opt?", "[x]", "a=b", "c//d"]:
        try:
            Field(bad_name)
        except ValidationError:
            continue
        assert False, f"非法字段名应抛出ValidationError: {bad_name!r}"

    for good_name in ["a", "config.path", "snake_case_2", "_private", "9lives"]:
        assert Field(good_name).name == good_name

    # 必填字段上的默认值被保留
    field = Field("mode", default_value="fast")
    assert field.default_value == "fast"
    assert not field.is_optional
    print("  ✓ 字段名校验正确")


def test_field_serialize():
    """测试字段序列化"""
    print("测试 field_serialize ...")
    get_meta_tree_cfg().reset()

    port = Field("port", True, "8080", "Port number")
    port.set_attribute("min", 1)
    port.set_attribute("max", "65535")
    assert port.serialize() == '[port="8080"]    min="1" max="65535" // Port number', port.serialize()

    assert Field("password", True).serialize() == "password?"
    assert Field("username").serialize() == "username"

    flag = Field("flag")
    flag.set_attribute("required")
    flag.set_attribute("label", "")
    assert flag.serialize() == 'flag    required label=""', flag.serialize()

    quoted = Field("a", description='say "hi"')
    assert quoted.serialize() == "a     // say &quot;hi&quot;", quoted.serialize()

    escaped = Field("b")
    escaped.set_attribute("text", "it's \"x\"\nnext")
    assert escaped.serialize() == 'b    text="it\\\'s \\"x\\"\\nnext"', escaped.serialize()

    # 必填字段上的默认值不输出
    assert Field("mode", default_value="fast").serialize() == "mode"
    print("  ✓ 字段序列化正确")


def test_section_fields():
    """测试section字段操作"""
    print("测试 section_fields ...")

    section = Section("extra")
    first = Field("x")
    section.add_field(first)
    section.add_field(Field("y"))

    try:
        section.add_field(Field("x", True))
        assert False, "重复字段应抛出DuplicateNameError"
    except DuplicateNameError as e:
        assert e.name == "x"
    assert section.get_field("x") is first, "重复添加失败后原字段应保持不变"

    replacement = Field("x", True)
    section.set_field(replacement)
    assert section.get_field("x") is replacement, "set_field应覆盖已有字段"
    assert [f.name for f in section.list_fields()] == ["x", "y"]

    section.delete_field("y")
    assert not section.has_field("y")
    assert section.get_field("y") is None

    for bad_name in ["", "two words"]:
        try:
            Section(bad_name)
            assert False, "非法section名应抛出ValidationError"
        except ValidationError:
            pass
    print("  ✓ section字段操作正确")


def test_section_serialize():
    """测试section序列化"""
    print("测试 section_serialize ...")
    get_meta_tree_cfg().reset()

    main = Section(MAIN_SECTION_NAME)
    assert main.serialize() == "", "空的main section应序列化为空字符串"
    main.add_field(Field("a"))
    main.add_field(Field("b", True))
    assert main.serialize() == "    a\n    b?\n", repr(main.serialize())

    extra = Section("extra")
    extra.add_field(Field("c"))
    assert extra.serialize() == "    @extra\n    c\n", repr(extra.serialize())
    assert extra.serialize("\t") == "\t@extra\n\tc\n"
    assert Section("empty").serialize() == "    @empty\n"
    print("  ✓ section序列化正确")


def test_record_full_name():
    """测试record全名与动作类别"""
    print("测试 record_full_name ...")

    tree = Tree()
    assert tree.add_record("user", "profile", "update").full_name() == "user.profile.update"
    assert tree.add_record("order", None, "create").full_name() == "order.create"
    assert tree.add_record("ping").full_name() == "ping"

    record = tree.add_record("app", "config.network", "getPort")
    assert record.full_name() == "app.config.network.getPort"
    assert record.property_name == "config.network"
    assert record.verb is VerbKind.GET
    assert tree.get_record("ping").verb is None
    assert tree.get_record("user.profile.update").verb is VerbKind.SET
    print("  ✓ record全名正确")


def test_record_validation():
    """测试record名称校验"""
    print("测试 record_validation ...")

    bad_args = [
        ("", None, None),
        ("has space", None, None),
        ("user", "", "x"),
        ("user", "a b", "x"),
        ("user", None, ""),
        ("user", None, "do it"),
    ]
    for args in bad_args:
        try:
            Record(*args)
        except ValidationError:
            continue
        assert False, f"非法record名称应抛出ValidationError: {args}"
    print("  ✓ record名称校验正确")


def test_record_sections_and_fields():
    """测试record的section与字段操作"""
    print("测试 record_sections_and_fields ...")

    record = Record("user", None, "add")
    assert record.has_section(MAIN_SECTION_NAME), "record构造后应存在main section"
    assert record.main_section is record.get_section(MAIN_SECTION_NAME)

    extra = record.add_section("extra")
    try:
        record.add_section("extra")
        assert False, "重复section应抛出DuplicateNameError"
    except DuplicateNameError:
        pass
    assert record.get_section("extra") is extra, "重复添加失败后原section应保持不变"

    record.add_field(Field("name"))
    record.add_field(Field("note"), "details")
    assert record.has_section("details"), "向未声明的section添加字段应隐式创建该section"
    assert record.has_field("note", "details")
    assert not record.has_field("note")
    assert record.get_field("missing", "nowhere") is None
    assert record.list_fields("nowhere") is None
    assert [s.name for s in record.list_sections()] == ["main", "extra", "details"]

    original_name_field = record.get_field("name")
    try:
        record.add_field(Field("name", True, "dup"))
        assert False, "重复字段应抛出DuplicateNameError"
    except DuplicateNameError:
        pass
    assert record.get_field("name") is original_name_field, "重复添加失败后原字段应保持不变"
    assert not original_name_field.is_optional
    assert [f.name for f in record.list_fields()] == ["name"]

    replacement = Field("name", True)
    record.set_field(replacement)
    assert record.get_field("name") is replacement
    record.set_field(Field("tag"), "labels")
    assert record.has_field("tag", "labels")

    record.delete_field("tag", "labels")
    record.delete_field("tag", "nowhere")
    assert record.list_fields("labels") == []

    record.set_section(Section("extra"))
    assert record.get_section("extra") is not extra, "set_section应覆盖同名section"
    record.delete_section("extra")
    assert not record.has_section("extra")

    try:
        record.delete_section(MAIN_SECTION_NAME)
        assert False, "删除main section应抛出ValidationError"
    except ValidationError:
        pass
    assert record.main_section is not None, "main section始终存在"
    assert record.has_field("name")

    record.set_section(Section(MAIN_SECTION_NAME))
    assert record.main_section.list_fields() == [], "set_section可以替换main section"
    print("  ✓ record的section与字段操作正确")


def test_record_name_is_read_only():
    """测试record名称字段只读"""
    print("测试 record_name_is_read_only ...")

    record = Record("user", "profile", "update")
    for attr in ("entity_name", "property_name", "action_name", "verb"):
        try:
            setattr(record, attr, "other")
        except AttributeError:
            continue
        assert False, f"{attr} 不应允许修改"
    assert record.full_name() == "user.profile.update"
    print("  ✓ record名称只读")


def test_record_serialize():
    """测试record序列化"""
    print("测试 record_serialize ...")
    get_meta_tree_cfg().reset()

    record = Record("user", "profile", "update", "Updates a profile")
    username = Field("username")
    username.set_attribute("maxLength", "32")
    record.add_field(username)
    record.add_field(Field("password", True))
    expected = (
        "user.profile.update    // Updates a profile\n"
        "    username    maxLength=\"32\"\n"
        "    password?"
    )
    assert record.serialize() == expected, repr(record.serialize())

    ping = Record("ping")
    ping.add_field(Field("x"), "extra")
    assert ping.serialize() == "ping\n    @extra\n    x", repr(ping.serialize())
    assert Record("ping").serialize() == "ping"
    print("  ✓ record序列化正确")


def test_tree_records():
    """测试树的record操作"""
    print("测试 tree_records ...")

    tree = Tree()
    first = tree.add_record("user", None, "getName", "first")
    tree.add_record("order", None, "listAll")

    try:
        tree.add_record("user", None, "getName", "second")
        assert False, "重复record应抛出DuplicateNameError"
    except DuplicateNameError as e:
        assert e.kind == "Record"
    assert tree.get_record("user.getName") is first, "重复添加失败后原record应保持不变"
    assert tree.get_record("user.getName").description == "first"
    assert tree.list_record_names() == ["user.getName", "order.listAll"]

    try:
        tree.add_record("bad name")
        assert False, "非法实体名应抛出ValidationError"
    except ValidationError:
        pass
    assert len(tree.list_records()) == 2

    replacement = Record("user", None, "getName", "replaced")
    tree.set_record(replacement)
    assert tree.get_record("user.getName") is replacement
    assert tree.list_record_names() == ["user.getName", "order.listAll"], "覆盖record不应改变顺序"

    tree.delete_record("order.listAll")
    tree.delete_record("not.there")
    assert not tree.has_record("order.listAll")
    assert tree.get_record("order.listAll") is None
    print("  ✓ 树的record操作正确")


def test_tree_serialize():
    """测试树序列化"""
    print("测试 tree_serialize ...")
    get_meta_tree_cfg().reset()

    tree = Tree()
    tree.add_record("ping")
    order = tree.add_record("order", None, "create", "Creates an order")
    order.add_field(Field("amount"))
    assert tree.serialize() == "ping\n\norder.create    // Creates an order\n    amount", repr(tree.serialize())
    assert Tree().serialize() == ""
    print("  ✓ 树序列化正确")


def test_error_messages():
    """测试异常信息格式"""
    print("测试 error_messages ...")

    error = FormatError("Invalid field: ?", 3, "    ?")
    assert "Format Error at Line 3" in str(error)
    assert "Line Content:     ?" in str(error)

    error = DuplicateNameError("Section", "extra")
    assert str(error) == "Duplicate Name Error: Section already exists: extra"
    error.with_location(7, "    @extra")
    assert error.line_num == 7
    assert "Duplicate Name Error at Line 7" in str(error)

    # 已有位置信息时不再覆盖
    error.with_location(9, "other")
    assert error.line_num == 7
    print("  ✓ 异常信息格式正确")


def main():
    tests = [
        ("字段属性", test_field_attributes),
        ("字段名校验", test_field_name_validation),
        ("字段序列化", test_field_serialize),
        ("section字段", test_section_fields),
        ("section序列化", test_section_serialize),
        ("record全名", test_record_full_name),
        ("record名称校验", test_record_validation),
        ("record的section与字段", test_record_sections_and_fields),
        ("record名称只读", test_record_name_is_read_only),
        ("record序列化", test_record_serialize),
        ("树的record操作", test_tree_records),
        ("树序列化", test_tree_serialize),
        ("异常信息", test_error_messages),
    ]
    failed = 0
    for test_name, test_func in tests:
        try:
            test_func()
        except AssertionError as e:
            failed += 1
            print(f"  ❌ {test_name} 测试失败: {e}")
    print("=" * 60)
    print(f"总计: {len(tests) - failed} 通过, {failed} 失败")
    return failed == 0


if __name__ == "__main__":
    main()
