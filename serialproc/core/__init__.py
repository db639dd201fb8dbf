# -*- coding: utf-8 -*-
"""
Core Module - Non-GUI business logic for serialproc.

Contains the process record model, input coercion, the grouped
projection, the change-staging and process-variables controllers,
notifications, and configuration.

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
