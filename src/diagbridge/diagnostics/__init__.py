# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Diagnostic publishing."""

from __future__ import annotations

from .publisher import DiagnosticPublisher, PublishListener

__all__ = ["DiagnosticPublisher", "PublishListener"]
