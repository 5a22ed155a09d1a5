#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Machine-readable output for the Media Optimizer's --json mode.
Logs go to stderr; stdout carries exactly one JSON document per run.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Any, Dict, Optional


def enable_json_logging():
    """Route logging to stderr at ERROR level so stdout stays parseable."""
    for h in logging.root.handlers[:]:
        logging.root.removeHandler(h)
    logging.basicConfig(stream=sys.stderr, level=logging.ERROR)


def _emit(payload: Dict[str, Any]) -> None:
    print(json.dumps(payload, ensure_ascii=False), file=sys.stdout)
    sys.stdout.flush()


def success(command: str, data: Optional[Dict[str, Any]] = None, code: int = 0) -> int:
    """Print a success document (e.g. a run summary) and return the exit code."""
    _emit({"result": "success", "command": command, "data": data if data is not None else {}})
    return code


def error(command: str, message: str, debug: Optional[Dict[str, Any]] = None, code: int = 1) -> int:
    payload = {"result": "error", "command": command, "error": message}
    if debug:
        payload["debug"] = debug
    _emit(payload)
    return code
