"""Test suite for the cifio package.

This package contains tests for all cifio functionality including:
- Tokenizing CIF content (scanner)
- Building CIF documents from tokens (parser)
- Data structure classes (CIFFile, CIFBlock, CIFFrame, CIFTable, values and columns)
- Writing CIF documents
- Integration tests for complete read/write workflows

Run tests with pytest:
    pytest                  # Run all tests
    pytest -v              # Verbose output
    pytest -m unit         # Run only unit tests
    pytest -m integration  # Run only integration tests
"""
