# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from blog_backend.infrastructure.db import Database


def check_database(database: Database) -> bool:
    return database.check()


__all__ = ["check_database"]
