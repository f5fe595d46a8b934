"""
Alembic Migration Environment
==============================

What:  Runs migrations against ONE of the three stores per invocation.
How:   The store is chosen with `-x store=<car|qr|stock>`; its URL comes from
       our settings and its metadata from its declarative base. Each store's
       migrations form their own branch, labelled with the store name:

           alembic -x store=car upgrade car@head
           alembic -x store=qr upgrade qr@head
           alembic -x store=stock upgrade stock@head

       Every database keeps its own alembic_version table, so it only ever
       records the revisions of its own branch.
"""

import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.ext.asyncio import async_engine_from_config
from alembic import context

from paddyhub.config import settings
from paddyhub.database import CarBase, QrBase, StockBase

# Import all models so their tables are registered on the bases
from paddyhub.models.car_arrival import CarArrival  # noqa: F401
from paddyhub.models.scan import Scan  # noqa: F401
from paddyhub.models.stock import Stock  # noqa: F401

STORES = {
    "car": (settings.car_database_url, CarBase.metadata),
    "qr": (settings.qr_database_url, QrBase.metadata),
    "stock": (settings.stock_database_url, StockBase.metadata),
}

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

store_name = context.get_x_argument(as_dictionary=True).get("store")
if store_name not in STORES:
    raise ValueError(
        f"Pass the target store with -x store=<{'|'.join(STORES)}> (got {store_name!r})"
    )

database_url, target_metadata = STORES[store_name]
config.set_main_option("sqlalchemy.url", database_url)


def run_migrations_offline() -> None:
    """Emit SQL for the selected store without connecting to it."""
    context.configure(
        url=database_url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection):
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
    )

    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    connectable = async_engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await connectable.dispose()


def run_migrations_online() -> None:
    asyncio.run(run_async_migrations())


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
