from sqlmodel import SQLModel, create_engine, Session

from focustimer import config

connect_args = {"check_same_thread": False} if config.DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(config.DATABASE_URL, echo=config.SQL_ECHO, connect_args=connect_args)


def init_db(bind=None):
    # Registers every table on SQLModel.metadata before create_all.
    from focustimer import models  # noqa: F401

    SQLModel.metadata.create_all(bind or engine)


def get_session():
    with Session(engine) as session:
        yield session
