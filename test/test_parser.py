"""Unit tests for the CIF document builder.

Tests parsing into data structures, column type inference and error handling.
"""

import polars as pl
import pytest

import cifio
from cifio import CIFFloats, CIFInt, CIFInts, CIFParseError, CIFParseErrorType, CIFString, CIFStrings
from cifio.parser import CIFParser


def parse_error(content: str, **kwargs) -> CIFParseError:
    """The parse error raised for `content`."""
    with pytest.raises(CIFParseError) as exc_info:
        cifio.read(content, **kwargs)
    return exc_info.value


def loop_column(raw_values: str, **kwargs):
    """The column parsed from a single-column table with the given values."""
    return cifio.read(f"data_a\nloop_\n_x\n{raw_values}\n", **kwargs)["a"]["x"]


@pytest.mark.unit
@pytest.mark.parser
class TestCIFParser:
    """Test suite for CIF parser functionality."""

    def test_parse_empty(self) -> None:
        """Test parsing content without any data block."""
        cif = cifio.read("# only a comment\n")
        assert len(cif) == 0
        assert cif.version is None

    def test_parse_version(self, sample_cif1_content: str) -> None:
        """Test that the version line is stored.

        Parameters
        ----------
        sample_cif1_content : str
            Sample CIF content fixture.
        """
        assert cifio.read(sample_cif1_content).version == "CIF_1.1"

    def test_parse_single_items(self, sample_cif1_content: str) -> None:
        """Test parsing single data items of each kind.

        Parameters
        ----------
        sample_cif1_content : str
            Sample CIF content fixture.
        """
        block = cifio.read(sample_cif1_content)["test_block"]
        assert block.item("single_item_1") == CIFString("value1")
        assert block.item("single_item_2").as_float() == 10.5
        assert block.item("single_item_3").is_missing
        assert block.item("single_item_4") == CIFInt(42)

    def test_parse_loop(self, sample_cif1_content: str) -> None:
        """Test parsing a table with string, float and integer columns.

        Parameters
        ----------
        sample_cif1_content : str
            Sample CIF content fixture.
        """
        block = cifio.read(sample_cif1_content)[0]
        table = block.table("loop_item_1")
        assert table.tags == ["loop_item_1", "loop_item_2", "loop_item_3"]
        assert table.get("loop_item_1").strings() == ["row1 col1", "row2_col1", "row3_col1"]
        assert isinstance(table.get("loop_item_2"), CIFFloats)
        assert table.get("loop_item_2").floats() == [1.0, 2.0, 3.0]
        assert table.get("loop_item_3").ints() == [100, 200, 300]
        assert block.table("loop_item_3") is table

    def test_end_to_end_example(self, sample_cif_block) -> None:
        """Test the integer and string columns of a two-column table.

        Parameters
        ----------
        sample_cif_block : CIFBlock
            Sample CIF block fixture.
        """
        table = sample_cif_block.table("_entity_poly_seq.num")
        assert table.columns == {"entity_poly_seq.num": 0, "entity_poly_seq.mon_id": 1}
        assert isinstance(table.values[0], CIFInts)
        assert table.values[0].ints() == [1, 2, 3, 4, 5]
        assert isinstance(table.values[1], CIFStrings)
        assert table.values[1].strings() == ["ALA", "ALA", "GLU", "GLU", "LYS"]

    def test_case_folding(self) -> None:
        """Test that block codes and data names are case-insensitive."""
        cif = cifio.read("data_Foo\n_Entry.ID 1ABC\n")
        assert cif.codes == ["foo"]
        block = cif["FOO"]
        assert block.item("_Entry.ID") == block.item("_entry.id") == CIFString("1ABC")

    def test_double_underscore_data_names(self) -> None:
        """Test that only the first leading underscore of a data name is dropped."""
        block = cifio.read("data_a\n__foo 1\n_foo 2\n__ 3\nloop_\n__t\n_t\n4 5\n")["a"]
        assert block.tags == ["_foo", "foo", "_", "_t", "t"]
        assert block.item("__foo") == CIFInt(1)
        assert block.item("_foo") == CIFInt(2)
        assert block.item("__") == CIFInt(3)
        assert block["__t"].ints() == [4]
        assert block["_t"].ints() == [5]
        assert cifio.write(cifio.read("data_a\n__foo 1\n")) == "data_a\n__foo  1\n"

    def test_save_frames(self, sample_dict_file_content: str) -> None:
        """Test parsing save frames in a dictionary file.

        Parameters
        ----------
        sample_dict_file_content : str
            Sample dictionary content fixture.
        """
        block = cifio.read(sample_dict_file_content)["test_dictionary"]
        assert list(block.frames) == ["test_category", "test_category.id"]
        assert block.item("dictionary.title") == CIFString("test_dictionary")

        category = block.frame("test_category")
        assert category.item("category.id") == CIFString("test_category")
        assert category.table("category_key.name").get("category_key.name").strings() == ["test_category.id"]

        item = block.frame("Test_Category.ID")
        assert item.item("item.description").as_str() == "   Multi-line description\n    of the item."
        assert "category.id" not in item

    def test_multiple_blocks(self, sample_multiblock_content: str) -> None:
        """Test parsing multiple data blocks, in order.

        Parameters
        ----------
        sample_multiblock_content : str
            Sample multi-block content fixture.
        """
        cif = cifio.read(sample_multiblock_content)
        assert cif.codes == ["block_1", "block_2", "block_3"]
        assert [block.item("item_b").as_int() for block in cif] == [1, 2, 3]

    def test_parse_is_idempotent(self) -> None:
        """Test that parsing twice returns the same document."""
        parser = CIFParser("data_a\n_x 1\n")
        assert parser.parse() is parser.parse()

    def test_parse_error_is_repeated(self) -> None:
        """Test that parsing again after a failure raises the same error."""
        parser = CIFParser("data_a\n_x\n")
        with pytest.raises(CIFParseError) as first:
            parser.parse()
        with pytest.raises(CIFParseError) as second:
            parser.parse()
        assert second.value is first.value
        assert second.value.error_type is CIFParseErrorType.VALUE_MISSING

    def test_invalid_numeric_nulls(self) -> None:
        """Test that only valid numeric-null modes are accepted."""
        with pytest.raises(ValueError):
            CIFParser("", numeric_nulls="nan")


@pytest.mark.unit
@pytest.mark.parser
class TestColumnTypes:
    """Test suite for the type inference of table columns."""

    def test_integer_column(self) -> None:
        """Test that integer values make an integer column."""
        col = loop_column("1 2 3")
        assert isinstance(col, CIFInts)
        assert col.ints() == [1, 2, 3]

    def test_float_column(self) -> None:
        """Test that integers and floats make a float column."""
        col = loop_column("1 2.5")
        assert isinstance(col, CIFFloats)
        assert col.floats() == [1.0, 2.5]

    def test_string_column(self) -> None:
        """Test that mixed strings and numbers make a string column."""
        col = loop_column("a 1")
        assert isinstance(col, CIFStrings)
        assert col.strings() == ["a", "1"]

    def test_nulls_in_integer_column(self) -> None:
        """Test that omitted and missing values in numeric columns become zero by default."""
        col = loop_column(". 1 2")
        assert isinstance(col, CIFInts)
        assert col.ints() == [0, 1, 2]
        assert loop_column("? 1.5").floats() == [0.0, 1.5]

    def test_nulls_kept_as_null(self) -> None:
        """Test that numeric nulls are kept with `numeric_nulls="null"`."""
        col = loop_column(". 1 ? 2", numeric_nulls="null")
        assert isinstance(col, CIFInts)
        assert col.ints() == [None, 1, None, 2]
        assert col.null_count == 2
        assert col.series.dtype == pl.Int64

    def test_all_null_column(self) -> None:
        """Test that a column of only omitted/missing values is a string column."""
        col = loop_column(". ?")
        assert isinstance(col, CIFStrings)
        assert col.strings() == [".", "?"]

    def test_nulls_in_string_column(self) -> None:
        """Test that omitted and missing values are kept verbatim in string columns."""
        assert loop_column("a . ?").strings() == ["a", ".", "?"]

    def test_quoted_numbers_are_strings(self) -> None:
        """Test that quoted numbers make a string column."""
        col = loop_column("1 '2'")
        assert isinstance(col, CIFStrings)
        assert col.strings() == ["1", "2"]


@pytest.mark.unit
@pytest.mark.parser
class TestCIFParserErrors:
    """Test suite for parse errors."""

    def test_duplicate_block(self) -> None:
        """Test that block codes are unique (case-insensitive)."""
        error = parse_error("data_Foo\n_x 1\ndata_foo\n_x 2\n")
        assert error.error_type is CIFParseErrorType.BLOCK_CODE_DUPLICATE
        assert error.line == 3
        assert error.context == {"block_code": "foo", "seen_line": 1}
        assert str(error).startswith("CIF parse error (line 3): Data block with name 'foo' already exists")

    def test_duplicate_frame(self) -> None:
        """Test that frame codes are unique within a block."""
        error = parse_error("data_a\nsave_f\nsave_\nsave_F\nsave_\n")
        assert error.error_type is CIFParseErrorType.FRAME_CODE_DUPLICATE
        assert error.line == 4

    def test_same_frame_in_different_blocks(self) -> None:
        """Test that frame codes only need to be unique within a block."""
        cif = cifio.read("data_a\nsave_f\nsave_\ndata_b\nsave_f\nsave_\n")
        assert [list(block.frames) for block in cif] == [["f"], ["f"]]

    @pytest.mark.parametrize(
        "content",
        [
            "data_a\n_x 1\n_X 2\n",
            "data_a\n_x 1\nloop_\n_y\n_x\n1 2\n",
            "data_a\nloop_\n_y\n_Y\n1 2\n",
            "data_a\nloop_\n_y\n1\nloop_\n_y\n2\n",
        ],
    )
    def test_duplicate_data_name(self, content: str) -> None:
        """Test that data names are unique across items and tables of a block.

        Parameters
        ----------
        content : str
            CIF content.
        """
        assert parse_error(content).error_type is CIFParseErrorType.DATA_NAME_DUPLICATE

    def test_same_data_name_in_block_and_frame(self) -> None:
        """Test that a frame has its own data names."""
        cif = cifio.read("data_a\n_x 1\nsave_f\n_x 2\nsave_\n")
        assert cif["a"].item("x") == CIFInt(1)
        assert cif["a"].frame("f").item("x") == CIFInt(2)

    def test_table_without_tags(self) -> None:
        """Test a 'loop_' without data names."""
        error = parse_error("data_a\nloop_\ndata_b\n")
        assert error.error_type is CIFParseErrorType.TABLE_NO_TAGS
        assert parse_error("data_a\nloop_\n").error_type is CIFParseErrorType.TABLE_NO_TAGS

    def test_table_without_values(self) -> None:
        """Test a 'loop_' with data names but no values."""
        error = parse_error("data_a\nloop_\n_x\n_y\n")
        assert error.error_type is CIFParseErrorType.TABLE_NO_VALUES
        assert parse_error("data_a\nloop_\n_x\nloop_\n_y\n1\n").error_type is CIFParseErrorType.TABLE_NO_VALUES

    def test_incomplete_table(self) -> None:
        """Test a table whose value count is not a multiple of its column count."""
        error = parse_error("data_a\n\nloop_\n_x\n_y\n1 2\n3\n")
        assert error.error_type is CIFParseErrorType.TABLE_INCOMPLETE
        assert error.context["table_line"] == 3
        assert error.context["value_count"] == 3
        assert error.context["tag_count"] == 2
        assert "starting on line 3" in error.message

    def test_unterminated_frame(self) -> None:
        """Test the end of input inside a save frame."""
        error = parse_error("data_a\nsave_f\n_x 1\n")
        assert error.error_type is CIFParseErrorType.FRAME_UNTERMINATED
        assert error.context == {"frame_code": "f"}

    def test_missing_value(self) -> None:
        """Test a data name at the end of the input."""
        error = parse_error("data_a\n_x\n")
        assert error.error_type is CIFParseErrorType.VALUE_MISSING
        assert error.context["data_name"] == "x"

    @pytest.mark.parametrize(
        "raw, kind",
        [("9223372036854775808", "integer"), ("-9223372036854775809", "integer"), ("1e400", "float")],
    )
    def test_numeric_overflow(self, raw: str, kind: str) -> None:
        """Test numbers that cannot be represented as 64-bit values.

        Parameters
        ----------
        raw : str
            Numeric literal.
        kind : str
            Expected numeric kind.
        """
        for content in (f"data_a\n_x {raw}\n", f"data_a\nloop_\n_x\n1\n{raw}\n"):
            error = parse_error(content)
            assert error.error_type is CIFParseErrorType.VALUE_CONVERSION
            assert error.context["kind"] == kind
            assert error.context["token_value"] == raw

    def test_scanner_error(self) -> None:
        """Test that scanner errors are raised as bad tokens."""
        error = parse_error("data_a\n_x 'abc\n")
        assert error.error_type is CIFParseErrorType.TOKEN_BAD
        assert error.line == 2
        assert error.message == "Quoted strings may not contain new lines."

    @pytest.mark.parametrize("content", ["data_a\n_x loop_\n", "data_a\nglobal_\n"])
    def test_reserved_words(self, content: str) -> None:
        """Test that reserved words are rejected.

        Parameters
        ----------
        content : str
            CIF content.
        """
        error = parse_error(content)
        assert error.error_type is CIFParseErrorType.TOKEN_BAD
        assert "_" in error.message

    def test_unterminated_text_field(self) -> None:
        """Test an unterminated text field."""
        error = parse_error("data_a\n_x\n;text\n")
        assert error.error_type is CIFParseErrorType.TOKEN_BAD
        assert "EOF" in error.message
