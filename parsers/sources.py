"""
Resolution of request objects into key/value sources.

Werkzeug (and therefore Flask) requests expose parsed query and form data as
multi-dicts. Starlette-style requests expose ``query_params`` and an async
``form()`` method. Anything else is treated as an already-resolved source.
"""

import inspect
from typing import Any
import logging

from werkzeug.datastructures import CombinedMultiDict
from werkzeug.wrappers import Request

from config.settings import settings

logger = logging.getLogger(__name__)


def resolve_query_source(source: Any) -> Any:
    """
    Get the query string data of a request, or the source itself.

    Args:
        source: Request object or key/value source

    Returns:
        Any: A key/value source readable by ``iter_entries``
    """
    if isinstance(source, Request):
        return source.args

    query_params = getattr(source, "query_params", None)
    if query_params is not None:
        return query_params

    return source


async def resolve_form_source(source: Any) -> Any:
    """
    Get the form body of a request, or the source itself.

    Uploaded files of a werkzeug request are combined with its text fields
    unless INCLUDE_UPLOADED_FILES is disabled.

    Args:
        source: Request object or key/value source

    Returns:
        Any: A key/value source readable by ``iter_entries``
    """
    if isinstance(source, Request):
        if settings.INCLUDE_UPLOADED_FILES:
            return CombinedMultiDict([source.form, source.files])
        return source.form

    read_form = getattr(source, "form", None)
    if callable(read_form):
        logger.debug("Reading form body from %s", type(source).__name__)
        form = read_form()
        if inspect.isawaitable(form):
            form = await form
        return form

    return source
