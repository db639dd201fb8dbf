# -*- coding: utf-8 -*-
"""
Service Module - Backends for process settings and variables.

Provides the abstract ProcessService contract, a REST client, a local
SQLite store, backend resolution, and a worker pool for background
round trips.

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
