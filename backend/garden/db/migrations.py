"""Additive schema evolution and one-time data repair.

There is no down-migration: columns are only ever added, never altered or
dropped.
"""

from __future__ import annotations

import logging

from sqlalchemy import Column, Engine, func, inspect, select, text
from sqlalchemy.orm import Session

from garden.mapping.icons import ADJECTIVE_SHAPES, shape_for_adjective
from garden.models.project import Project

logger = logging.getLogger(__name__)


def _column_ddl(column: Column, engine: Engine) -> str | None:
    type_sql = column.type.compile(dialect=engine.dialect)
    if column.nullable:
        return f'"{column.name}" {type_sql}'
    default = column.default.arg if column.default is not None and column.default.is_scalar else None
    if default is None:
        return None
    literal = repr(default) if isinstance(default, str) else str(default)
    return f'"{column.name}" {type_sql} NOT NULL DEFAULT {literal}'


def missing_columns(engine: Engine, table=Project.__table__) -> list[Column]:
    existing = {c["name"] for c in inspect(engine).get_columns(table.name)}
    return [c for c in table.columns if c.name not in existing]


def migrate_schema(engine: Engine, table=Project.__table__) -> list[str]:
    """ALTER TABLE ADD COLUMN for every model column the live table lacks."""
    added: list[str] = []
    columns = missing_columns(engine, table)
    if not columns:
        return added
    with engine.begin() as conn:
        for column in columns:
            ddl = _column_ddl(column, engine)
            if ddl is None:
                logger.warning("Cannot add required column %s without a default; skipping", column.name)
                continue
            conn.execute(text(f'ALTER TABLE "{table.name}" ADD COLUMN {ddl}'))
            added.append(column.name)
    return added


def heal_fruit_types(session: Session) -> int:
    """Store the adjective's shape on rows whose fruit type disagrees with it."""
    rows = session.scalars(
        select(Project).where(
            func.lower(func.trim(Project.project_adjective)).in_([a.lower() for a in ADJECTIVE_SHAPES])
        )
    ).all()
    healed = 0
    for project in rows:
        expected = shape_for_adjective(project.project_adjective)
        if project.fruit_type != expected:
            logger.debug("Project %s: fruit type %s -> %s", project.id, project.fruit_type, expected)
            project.fruit_type = expected
            healed += 1
    if healed:
        session.commit()
    return healed
