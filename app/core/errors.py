# app/core/errors.py


class FinanceError(Exception):
    """Error base del dominio."""


class QueryFailure(FinanceError):
    """Falló una consulta al almacén de transacciones.

    `query` identifica la sub-consulta (p.ej. "upcoming_bills") para que el
    log diga cuál de las lecturas abortó la agregación.
    """

    def __init__(self, query: str, message: str):
        self.query = query
        self.message = message
        super().__init__(f"{query}: {message}")


class InvalidPeriodKey(FinanceError):
    """La clave de período no tiene el formato YYYY-MM."""

    def __init__(self, key):
        self.key = key
        super().__init__(f"Período inválido: {key!r} (se espera YYYY-MM)")
