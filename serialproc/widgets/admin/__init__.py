# -*- coding: utf-8 -*-
"""
Serial Process Admin Widget Category - Process administration.

Orange Data Mining widget category providing the process settings
table and the process variables form.

Category metadata for Orange Canvas discovery.

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

# Orange widget category metadata
NAME = "Serial Process Admin"
DESCRIPTION = "Process settings and process-control variables"
BACKGROUND = "#6c757d"
ICON = "icons/admin.svg"
PRIORITY = 200
