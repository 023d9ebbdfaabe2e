"""Parsing utilities for module documents."""

from parse.module_decl import IMPORT_DENY_LIST, extract_module

__all__ = ["IMPORT_DENY_LIST", "extract_module"]
