import asyncio
import inspect
import logging
from typing import (
    Annotated,
    Any,
    Callable,
    Dict,
    List,
    Optional,
    Type,
    TypeVar,
    Union,
    get_args,
    get_origin,
    get_type_hints,
)

from pydantic import ValidationError, create_model

from .utils import make_json_safe

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _resolve_final_type(tp: Any) -> Any:
    """
    Resolve the underlying type from type hints.

    Handles Annotated, Union, and generic origins to return the
    final usable type.

    :param tp: A typing annotation.
    :return: The resolved base type.
    """
    origin = get_origin(tp)

    if origin is Union:
        return tp
    elif origin is Annotated:
        return get_args(tp)[0]
    elif origin:
        return origin

    return tp


class CommandRegistry:
    """
    Commands reachable from the UI plus the state they share.

    State objects are handed in with :meth:`manage` and injected into
    any handler parameter annotated with their type. Nothing is
    instantiated implicitly.
    """

    def __init__(self):
        self._commands: Dict[str, Callable[..., Any]] = {}
        self._state: Dict[type, Any] = {}

    def command(self, func_or_name: Union[None, str, Callable] = None):
        """
        Register a function as a command handler.

        Usable as ``@registry.command``, ``@registry.command("name")``
        or as a plain call ``registry.command(func)``.

        :param func_or_name: Either the function to register directly,
            or the command name. If ``None``, the function name is used.
        :return: The registered function, or a decorator.
        :raises ValueError: If the name is already taken.
        """
        if callable(func_or_name):
            return self._register(func_or_name.__name__, func_or_name)

        def decorator(func: Callable):
            return self._register(func_or_name or func.__name__, func)

        return decorator

    def _register(self, name: str, func: Callable) -> Callable:
        if name in self._commands:
            raise ValueError(f"Command '{name}' is already registered")
        self._commands[name] = func
        return func

    def manage(self, instance: Any) -> "CommandRegistry":
        """
        Make ``instance`` available to handlers annotated with its type.

        :raises ValueError: If an instance of the same type is already managed.
        """
        tp = type(instance)
        if tp in self._state:
            raise ValueError(f"State of type '{tp.__name__}' is already managed")
        self._state[tp] = instance
        return self

    def state(self, tp: Type[T]) -> T:
        """Return the managed instance of ``tp``. Raises ``KeyError`` if absent."""
        return self._state[tp]

    def names(self) -> List[str]:
        return sorted(self._commands)

    async def invoke(
        self,
        cmd: str,
        result_id: Any,
        error_id: Any,
        data: Optional[Dict[str, Any]],
    ) -> Dict[str, Any]:
        """
        Execute the handler registered for ``cmd``.

        Arguments are validated against the handler's type hints with a
        Pydantic model, managed state is injected, and the result is
        made JSON-safe. Plain functions run in a worker thread so that
        blocking I/O does not stall the event loop.

        :param cmd: The command name to dispatch.
        :param result_id: Identifier for the success response.
        :param error_id: Identifier for error responses.
        :param data: Arguments by name; ``None`` means no arguments.
        :return: ``{"result_id": ..., "result": ...}`` on success or
            ``{"error_id": ..., "error": ...}`` on failure.
        """
        if not isinstance(cmd, str):
            return {"error_id": error_id, "error": f"Invalid command name: {cmd!r}"}

        func = self._commands.get(cmd)
        if func is None:
            return {"error_id": error_id, "error": f"No handler registered for command '{cmd}'"}

        if data is None:
            data = {}
        if not isinstance(data, dict):
            return {"error_id": error_id, "error": "Invalid parameters: payload must be an object"}

        sig = inspect.signature(func)
        type_hints = get_type_hints(func, include_extras=True)
        values: Dict[str, Any] = {}
        errors = []
        data_fields = {}

        for name, param in sig.parameters.items():
            hint = type_hints.get(name, Any)
            final_type = _resolve_final_type(hint)

            if inspect.isclass(final_type) and final_type in self._state:
                values[name] = self._state[final_type]
            elif name in data:
                data_fields[name] = (hint, ...)
                values[name] = data[name]
            elif param.default is not inspect.Parameter.empty:
                data_fields[name] = (hint, param.default)
            else:
                errors.append(f"{name} is missing")

        if errors:
            return {"error_id": error_id, "error": f"Invalid parameters: {', '.join(errors)}"}

        if data_fields:
            Model = create_model(f"{func.__name__}_Validator", **data_fields)
            try:
                validated = Model(**{k: values[k] for k in data_fields if k in values})
            except ValidationError as e:
                return {"error_id": error_id, "error": f"Validation failed: {e}"}
            for field in data_fields:
                values[field] = getattr(validated, field)

        try:
            if inspect.iscoroutinefunction(func):
                result = await func(**values)
            else:
                result = await asyncio.to_thread(func, **values)
        except Exception as e:
            logger.debug("Command %r failed: %s", cmd, e)
            return {"error_id": error_id, "error": str(e)}

        return {"result_id": result_id, "result": make_json_safe(result)}
