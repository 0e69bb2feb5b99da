"""
Identifier and clock helpers shared by the store.

Ids are opaque uuid4 strings; quizzes, questions and choices live in
separate maps so a cross-type collision would be harmless anyway.
"""
from __future__ import annotations
from datetime import datetime, timezone
import uuid


def new_id() -> str:
    return str(uuid.uuid4())


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
