"""
Tests for the Lua parser boundary.
"""

import pytest

from lua_index.core.parser import LuaParser, LuaSyntaxError
from lua_index.models.index_config import LuaVersion

GOTO_SOURCE = """
for i = 1, 3 do
  if i == 2 then goto continue end
  print(i)
  ::continue::
end
"""

FLOOR_DIVISION_SOURCE = "local half = 7 // 2\n"
BITWISE_SOURCE = "local mask = 0xff & flags\n"
ATTRIBUTE_SOURCE = "local limit <const> = 10\n"


class TestLuaParser:
    """Test LuaParser."""

    def test_parse_valid_source(self):
        """Valid source produces a chunk root."""
        result = LuaParser().parse("local x = 1\nprint(x)\n")

        assert result.root_node.type == "chunk"
        assert result.language == "lua"

    def test_syntax_error_reports_one_based_line(self):
        """Broken source raises with a 1-based line number."""
        with pytest.raises(LuaSyntaxError) as exc_info:
            LuaParser().parse("local ok = 1\nlocal = = 2\n")

        assert exc_info.value.line >= 1
        assert str(exc_info.value).startswith(f"[{exc_info.value.line}:")

    def test_detect_language(self):
        """Only .lua files are claimed."""
        parser = LuaParser()

        assert parser.detect_language("Scripts/main.lua")
        assert parser.detect_language("Scripts/MAIN.LUA")
        assert not parser.detect_language("Scripts/main.py")

    @pytest.mark.parametrize("source, rejected, accepted", [
        (GOTO_SOURCE, LuaVersion.LUA_51, LuaVersion.LUA_52),
        (FLOOR_DIVISION_SOURCE, LuaVersion.LUA_52, LuaVersion.LUA_53),
        (BITWISE_SOURCE, LuaVersion.LUA_52, LuaVersion.LUA_53),
        (ATTRIBUTE_SOURCE, LuaVersion.LUA_53, LuaVersion.LUA_54),
    ])
    def test_version_gated_syntax(self, source, rejected, accepted):
        """Newer syntax is rejected by older dialects and accepted once introduced."""
        with pytest.raises(LuaSyntaxError):
            LuaParser(rejected).parse(source)

        assert LuaParser(accepted).parse(source).root_node.type == "chunk"

    def test_luajit_accepts_goto_but_not_integer_operators(self):
        """LuaJIT has goto but no 5.3 operators."""
        parser = LuaParser(LuaVersion.LUAJIT)

        parser.parse(GOTO_SOURCE)
        with pytest.raises(LuaSyntaxError):
            parser.parse(FLOOR_DIVISION_SOURCE)

    def test_not_equal_is_not_bitwise(self):
        """The ~= comparison is plain 5.1 syntax."""
        LuaParser(LuaVersion.LUA_51).parse("if a ~= b then print(a) end\n")

    def test_character_columns_for_multibyte_lines(self):
        """Byte columns are converted to character columns."""
        result = LuaParser().parse('s = "éé"; y = 1\n')

        # 'y' sits at byte 12 but character 10
        assert result.character(0, 12) == 10
        assert result.character(0, 3) == 3
