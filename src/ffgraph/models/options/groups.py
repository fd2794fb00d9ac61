"""Shared Cyclopts groups for option models."""

from __future__ import annotations

from cyclopts import Group

PIPELINE_GROUP = Group.create_ordered("Pipeline")
COMPILE_GROUP = Group.create_ordered("Compile")
RUNTIME_GROUP = Group.create_ordered("Runtime")

__all__ = ["COMPILE_GROUP", "PIPELINE_GROUP", "RUNTIME_GROUP"]
