"""Fixtures and utilities for testing the cifio package."""

from typing import Generator
import tempfile
from pathlib import Path

import pytest

import cifio
from cifio import CIFFile, CIFBlock, CIFTable


# ============================================================================
# Test Fixtures
# ============================================================================


@pytest.fixture
def sample_cif1_content() -> str:
    """Sample CIF 1.1 content with single items and a table.

    Returns
    -------
    str
        A simple CIF 1.1 file content with single values and a loop.
    """
    return """#\\#CIF_1.1
# A comment line
data_test_block
_single_item_1  'value1'
_single_item_2  10.5
_single_item_3  ?
_single_item_4  42

loop_
_loop_item_1
_loop_item_2
_loop_item_3
'row1 col1'  1.0  100
row2_col1  2.0  200
row3_col1  3  300
"""


@pytest.fixture
def sample_mmcif_content() -> str:
    """Sample mmCIF content with two tables.

    Returns
    -------
    str
        An mmCIF file content with categories and loops.
    """
    return """data_1ABC
_entry.id  1ABC
_struct.title  'Test Structure'

loop_
_entity_poly_seq.num
_entity_poly_seq.mon_id
1  ALA
2  ALA
3  GLU
4  GLU
5  LYS

loop_
_atom_site.id
_atom_site.type_symbol
_atom_site.Cartn_x
_atom_site.Cartn_y
_atom_site.Cartn_z
_atom_site.occupancy
1  C  10.0  20.0  30.0  1.00
2  N  11.0  21.0  31.0  ?
3  O  12.5  22.0  32.0  0.50
"""


@pytest.fixture
def sample_dict_file_content() -> str:
    """Sample CIF dictionary file with save frames.

    Returns
    -------
    str
        A CIF dictionary file with save frames.
    """
    return """data_test_dictionary
_dictionary.title  test_dictionary

save_test_category
    _category.description  'Test category description'
    _category.id  test_category
    _category.mandatory_code  no

    loop_
    _category_key.name
    'test_category.id'
save_

save_test_category.id
    _item.name  'test_category.id'
    _item.category_id  test_category
    _item.description
;   Multi-line description
    of the item.
;
save_
"""


@pytest.fixture
def sample_multiblock_content() -> str:
    """Sample CIF file with multiple data blocks.

    Returns
    -------
    str
        A CIF file with multiple data blocks.
    """
    return """
data_block_1
_item_a  'value_a1'
_item_b  1

data_block_2
_item_a  'value_a2'
_item_b  2

data_block_3
_item_a  'value_a3'
_item_b  3
"""


@pytest.fixture
def temp_cif_file(sample_mmcif_content: str) -> Generator[Path, None, None]:
    """Create a temporary CIF file for testing file I/O.

    Parameters
    ----------
    sample_mmcif_content : str
        Content to write to the temporary file.

    Yields
    ------
    Path
        Path to the temporary CIF file.
    """
    with tempfile.NamedTemporaryFile(mode="w", suffix=".cif", delete=False) as f:
        f.write(sample_mmcif_content)
        temp_path = Path(f.name)

    yield temp_path

    # Cleanup
    if temp_path.exists():
        temp_path.unlink()


@pytest.fixture
def sample_cif_file(sample_mmcif_content: str) -> CIFFile:
    """Parse the sample mmCIF content.

    Parameters
    ----------
    sample_mmcif_content : str
        Sample mmCIF content.

    Returns
    -------
    CIFFile
        Parsed CIF file object.
    """
    return cifio.read(sample_mmcif_content)


@pytest.fixture
def sample_cif_block(sample_cif_file: CIFFile) -> CIFBlock:
    """Get the first data block from the sample CIF file.

    Parameters
    ----------
    sample_cif_file : CIFFile
        Sample CIF file.

    Returns
    -------
    CIFBlock
        First data block of the file.
    """
    return sample_cif_file[0]


# ============================================================================
# Test Utilities
# ============================================================================


def assert_cif_equal(cif1: CIFFile, cif2: CIFFile) -> None:
    """Assert that two CIF files are equal.

    Parameters
    ----------
    cif1 : CIFFile
        First CIF file.
    cif2 : CIFFile
        Second CIF file.

    Raises
    ------
    AssertionError
        If the CIF files are not equal.
    """
    assert cif1.version == cif2.version, "Different versions"
    assert cif1.codes == cif2.codes, "Different block codes"

    for block1, block2 in zip(cif1, cif2):
        assert_block_equal(block1, block2)
        assert list(block1.frames) == list(block2.frames), "Different frame codes"
        for frame_code in block1.frames:
            assert_block_equal(block1.frame(frame_code), block2.frame(frame_code))
    assert cif1 == cif2


def assert_block_equal(block1, block2) -> None:
    """Assert that two CIF blocks (or save frames) have the same content.

    Parameters
    ----------
    block1 : CIFBlockLike
        First block.
    block2 : CIFBlockLike
        Second block.

    Raises
    ------
    AssertionError
        If the blocks are not equal.
    """
    assert block1.name == block2.name, "Different block codes"
    assert block1.items == block2.items, "Different single data items"
    assert set(block1.tables) == set(block2.tables), "Different table data names"

    tables1 = block1.unique_tables()
    tables2 = block2.unique_tables()
    assert len(tables1) == len(tables2), "Different number of tables"
    for table1, table2 in zip(tables1, tables2):
        assert_table_equal(table1, table2)


def assert_table_equal(table1: CIFTable, table2: CIFTable) -> None:
    """Assert that two CIF tables are equal.

    Parameters
    ----------
    table1 : CIFTable
        First table.
    table2 : CIFTable
        Second table.

    Raises
    ------
    AssertionError
        If the tables are not equal.
    """
    assert table1.tags == table2.tags, "Different column data names"
    assert table1.row_count == table2.row_count, "Different number of rows"
    for col1, col2 in zip(table1.values, table2.values):
        assert type(col1) is type(col2), "Different column types"
        assert col1.to_list() == col2.to_list(), "Different column values"
