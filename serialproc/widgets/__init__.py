# -*- coding: utf-8 -*-
"""
Widgets Module - Orange Data Mining add-on widgets for serialproc.

Contains one widget category:
- Serial Process Admin: process settings table and process variables

License
-------
MIT License
Copyright (c) 2026 serialproc contributors
See LICENSE file for full text.

Created
-------
2026-10-19

Modified
--------
2026-10-19
"""
