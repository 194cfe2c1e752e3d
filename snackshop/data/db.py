from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Union

from sqlmodel import SQLModel, Session, create_engine
from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from snackshop.core.errors import DatabaseInitError

logger = logging.getLogger(__name__)


def _enable_foreign_keys(dbapi_connection, _connection_record) -> None:
	# SQLite ships with FK enforcement off; ON DELETE CASCADE needs it per connection
	cursor = dbapi_connection.cursor()
	try:
		cursor.execute("PRAGMA foreign_keys=ON")
	finally:
		cursor.close()


def get_engine(path: Union[str, Path], echo: bool = False) -> Engine:
	"""Return a SQLAlchemy engine for the SQLite file at path.

	The engine is lazy: nothing touches the file until the first connection.
	"""
	# Use posix path for SQLAlchemy URL compatibility on Windows
	url = f"sqlite:///{Path(path).as_posix()}"
	engine = create_engine(url, echo=echo)
	event.listen(engine, "connect", _enable_foreign_keys)
	return engine


def create_db_and_tables(engine: Engine) -> None:
	"""Create the invoices and invoice_items tables if they do not exist yet.

	Raises DatabaseInitError when the file cannot be opened or a table cannot
	be created.
	"""
	# Ensure models are imported so metadata has all tables
	import snackshop.data.models  # noqa: F401

	try:
		SQLModel.metadata.create_all(engine)
	except SQLAlchemyError as e:
		logger.error("Schema bootstrap failed for %s: %s", engine.url, e)
		raise DatabaseInitError(str(e)) from e


def open_database(path: Union[str, Path], echo: bool = False) -> Engine:
	"""Open (creating if absent) the database file and make sure the schema exists."""
	p = Path(path)
	try:
		p.parent.mkdir(parents=True, exist_ok=True)
	except OSError as e:
		raise DatabaseInitError(f"Cannot create folder for {p}: {e}") from e

	engine = get_engine(p, echo=echo)
	try:
		create_db_and_tables(engine)
	except DatabaseInitError:
		engine.dispose()
		raise
	logger.info("Database ready at %s", p)
	return engine


def get_session(engine: Engine) -> Session:
	"""Create a new SQLModel Session bound to engine.

	expire_on_commit=False so returned instances keep attribute values after commit.
	"""
	return Session(engine, expire_on_commit=False)


@contextmanager
def session_scope(engine: Engine) -> Generator[Session, None, None]:
	"""Run a unit of work: commit on success, roll back on any exception.

	Usage:
		with session_scope(engine) as s:
			... use s ...
	"""
	session = get_session(engine)
	try:
		yield session
		session.commit()
	except Exception:
		session.rollback()
		raise
	finally:
		session.close()
