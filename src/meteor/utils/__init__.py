# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Utility helpers shared across meteor."""

from .rwlock import ReadWriteLock

__all__ = ["ReadWriteLock"]
