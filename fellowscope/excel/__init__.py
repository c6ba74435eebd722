"""Decoding of uploaded workbooks and CSV files into raw rows."""
