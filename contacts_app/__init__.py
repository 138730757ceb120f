# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Contacts app: server-rendered contact management with a background archiver."""
