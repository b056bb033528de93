"""Spreadsheet reading and writing for finport."""

from finport.spreadsheet.reader import SpreadsheetReader, WorkbookReader

__all__ = ["SpreadsheetReader", "WorkbookReader"]
