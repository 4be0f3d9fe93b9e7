import os
from typing import List, Optional
from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    MetaData,
    String,
    Table,
    UniqueConstraint,
    create_engine,
    func,
    select,
)
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from .schema import NodeSpec

DEFAULT_DATABASE_URL = "sqlite:///wigle_nodes.db"

metadata = MetaData()

nodes = Table(
    "nodes",
    metadata,
    Column("name", String, nullable=False),
    Column("version", String, nullable=False),
    Column("title", String, nullable=False),
    Column("category", String, nullable=False),
    Column("spec", JSON, nullable=False),
    Column("enabled", Boolean, nullable=False, default=True),
    Column("updated_at", DateTime(timezone=True), server_default=func.now(), onupdate=func.now()),
    UniqueConstraint("name", "version", name="nodes_name_version_key"),
)

_engine = None


def engine():
    global _engine
    if _engine is None:
        dsn = os.getenv("DATABASE_URL") or DEFAULT_DATABASE_URL
        _engine = create_engine(dsn, pool_pre_ping=True)
        metadata.create_all(_engine)
    return _engine


def reset_engine() -> None:
    global _engine
    if _engine is not None:
        _engine.dispose()
    _engine = None


def builtin_specs() -> List[dict]:
    from .plugins.wigle.node import WIGLE_NODE

    return [WIGLE_NODE.model_dump()]


def builtin_credentials() -> List[dict]:
    from .plugins.wigle.credentials import WIGLE_API

    return [WIGLE_API.model_dump()]


def _upsert(dialect: str):
    if dialect == "postgresql":
        return pg_insert(nodes)
    if dialect == "sqlite":
        return sqlite_insert(nodes)
    raise RuntimeError(f"Unsupported registry database: {dialect}")


def install_nodes(specs: List[dict]):
    eng = engine()
    with eng.begin() as c:
        for d in specs:
            spec = NodeSpec(**d)
            stmt = _upsert(eng.dialect.name).values(
                name=spec.name,
                version=spec.version,
                title=spec.title,
                category=spec.category,
                spec=spec.model_dump(),
                enabled=True,
            )
            stmt = stmt.on_conflict_do_update(
                index_elements=["name", "version"],
                set_={
                    "title": stmt.excluded.title,
                    "category": stmt.excluded.category,
                    "spec": stmt.excluded.spec,
                    "updated_at": func.now(),
                },
            )
            c.execute(stmt)


def _infer_required_keys(spec: dict) -> List[str]:
    out: List[str] = []
    auth = spec.get("auth") or {}
    provider = (auth.get("provider") or "").lower()
    if provider == "wigle":
        out.append("WIGLE_API_KEY")
    return out


def list_nodes(category: Optional[str] = None) -> List[dict]:
    q = select(nodes.c.name, nodes.c.version, nodes.c.title, nodes.c.category, nodes.c.enabled, nodes.c.spec)
    if category:
        q = q.where(nodes.c.category == category)
    with engine().begin() as c:
        rows = c.execute(q.order_by(nodes.c.name, nodes.c.version)).mappings().all()
    out: List[dict] = []
    for r in rows:
        d = dict(r)
        spec = d.pop("spec", None) or {}
        doc = spec.get("doc")
        if not doc:
            # Compose a doc from the declared inputs
            inputs = spec.get("inputs") or {}
            if inputs:
                doc = "Inputs: " + ", ".join(list(inputs.keys())[:4])
        if doc:
            d["doc"] = str(doc)
        req_keys = _infer_required_keys(spec)
        if req_keys:
            d["required_keys"] = req_keys
        out.append(d)
    return out


def get_node(name: str, version: Optional[str] = None) -> Optional[dict]:
    q = select(nodes.c.spec).where(nodes.c.name == name)
    if version:
        q = q.where(nodes.c.version == version)
    q = q.order_by(nodes.c.version.desc()).limit(1)
    with engine().begin() as c:
        return c.execute(q).scalar()
