# -*- coding: utf-8 -*-
"""
serialproc - Serial Process Admin.

Orange Data Mining add-on widgets for administering serial process
settings (a grouped, inline-editable table with batch save) and the
global process-control variables (engine on/off flag and timestamp).

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

__version__ = "0.1.0"
