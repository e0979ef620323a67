from sqlmodel import SQLModel, Session, create_engine

from app.core.config import DATABASE_URL, SQL_ECHO


def build_engine(url: str, echo: bool = False, **kwargs):
    connect_args = {}
    if url.startswith("sqlite"):
        # Las consultas del dashboard corren en el threadpool
        connect_args["check_same_thread"] = False
    return create_engine(url, echo=echo, connect_args=connect_args, **kwargs)


engine = build_engine(DATABASE_URL, echo=SQL_ECHO)  # SQL_ECHO=true imprime las queries

def create_db_and_tables():
    from app.models.user import User  # importar los modelos
    from app.models.transaction import Transaction
    SQLModel.metadata.create_all(engine)

def get_session():
    with Session(engine) as session:
        yield session
