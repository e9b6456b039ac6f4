"""Request trace context.

trace_id текущего запроса: попадает в логи и в заголовок X-Trace-ID ответа.
"""

from contextvars import ContextVar
from uuid import uuid4

# Длиннее - не доверяем клиенту и генерируем свой
MAX_TRACE_ID_LENGTH = 128

trace_id_var: ContextVar[str | None] = ContextVar("trace_id", default=None)


def new_trace_id() -> str:
    """Сгенерировать trace_id (32 hex символа)."""
    return uuid4().hex


def resolve_trace_id(incoming: str | None) -> str:
    """Выбрать trace_id для запроса.

    Значение из заголовка клиента используется, если оно непустое
    и не длиннее MAX_TRACE_ID_LENGTH. Иначе генерируется новое.

    Args:
        incoming: Значение заголовка X-Trace-ID или None.

    Returns:
        trace_id запроса.

    """
    candidate = (incoming or "").strip()
    if not candidate or len(candidate) > MAX_TRACE_ID_LENGTH:
        return new_trace_id()
    return candidate


def get_trace_id() -> str:
    """Текущий trace_id. Вне запроса назначается новый."""
    trace_id = trace_id_var.get()
    if trace_id is None:
        trace_id = new_trace_id()
        trace_id_var.set(trace_id)
    return trace_id


def set_trace_id(trace_id: str) -> None:
    trace_id_var.set(trace_id)
