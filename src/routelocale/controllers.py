"""Controllers and attribute routes.

A controller groups related actions. Each action method carries its own
route template through the ``@action`` decorator; the controller adds a
shared template in front of it::

    class HomeController(Controller):
        route_prefix = "Home"

        @action("Book/{id:int}")
        def book(self, id: int) -> str:
            return f"booking {id}"

yields the route ``/Home/Book/{id:int}`` for controller ``Home``,
action ``book``. The controller name is the class name without its
``Controller`` suffix; the controller namespace is the defining module.
"""

import inspect
import logging
import re
import typing
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, ClassVar

from routelocale.errors import ActionReferenceError, ConfigurationError
from routelocale.routing.route import Route
from routelocale.routing.templates import combine_templates, parse_path

_CONTROLLER_SUFFIX = re.compile(r"Controller$")
_ACTION_ATTR = "__routelocale_action__"

logger = logging.getLogger("routelocale.controllers")


class Controller:
    """Base class for attribute-routed controllers.

    A fresh instance is created for every dispatched request.
    """

    # Controller-level template. None uses the controller name.
    route_prefix: ClassVar[str | None] = None


@dataclass(frozen=True, slots=True)
class _ActionSpec:
    template: str | None
    methods: tuple[str, ...] | None
    name: str | None
    action_name: str | None


def action(
    template: str | None = None,
    *,
    methods: list[str] | None = None,
    name: str | None = None,
    action_name: str | None = None,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Mark a controller method as a routed action.

    Args:
        template: Action route template. Defaults to the action name.
            A leading ``/`` makes it absolute (the controller template
            is not prepended).
        methods: HTTP methods. Defaults to ``["GET"]``.
        name: Route name for URL building. Defaults to
            ``"<Controller>.<action>"``.
        action_name: Action name, defaulting to the method name. Several
            methods may share one; their argument types tell them apart.
    """

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        spec = _ActionSpec(
            template=template,
            methods=tuple(m.upper() for m in methods) if methods else None,
            name=name,
            action_name=action_name,
        )
        setattr(func, _ACTION_ATTR, spec)
        return func

    return decorator


@dataclass(frozen=True, slots=True)
class ActionDescriptor:
    """Everything the route table needs to know about one action."""

    controller_class: type
    controller: str
    controller_namespace: str
    action: str
    action_arguments: tuple[type, ...]
    controller_template: str
    action_template: str
    methods: frozenset[str]
    name: str
    handler: Callable[..., Any]

    def to_route(self) -> Route:
        return Route(
            path=combine_templates(None, self.controller_template, self.action_template),
            handler=self.handler,
            methods=self.methods,
            name=self.name,
            controller_class=self.controller_class,
            controller=self.controller,
            controller_namespace=self.controller_namespace,
            action=self.action,
            action_arguments=self.action_arguments,
            controller_template=self.controller_template,
            action_template=self.action_template,
        )


def controller_name(controller: type | str) -> str:
    """``HomeController`` (class or string) -> ``"Home"``."""
    name = controller if isinstance(controller, str) else controller.__name__
    return _CONTROLLER_SUFFIX.sub("", name)


def is_controller(obj: object) -> bool:
    return inspect.isclass(obj) and issubclass(obj, Controller)


def action_arguments(func: Callable[..., Any]) -> tuple[type, ...]:
    """Annotated parameter types of an action, ``self`` excluded.

    Unannotated parameters count as ``object``. If some annotation names
    cannot be resolved, the others are still resolved and the failing ones
    stay strings (a warning names them).
    """
    try:
        hints = typing.get_type_hints(func)
    except NameError:
        hints = _hints_by_parameter(func)
    params = list(inspect.signature(func).parameters.values())[1:]
    return tuple(
        hints.get(p.name, object if p.annotation is p.empty else p.annotation)
        for p in params
        if p.kind not in (p.VAR_POSITIONAL, p.VAR_KEYWORD)
    )


def _hints_by_parameter(func: Callable[..., Any]) -> dict[str, Any]:
    namespace = getattr(func, "__globals__", {})
    hints: dict[str, Any] = {}
    for name, annotation in inspect.get_annotations(func).items():
        if isinstance(annotation, str):
            try:
                annotation = eval(annotation, namespace)  # noqa: S307
            except NameError:
                logger.warning(
                    "%s: cannot resolve annotation %r of parameter %r; "
                    "where_action() argument lists will not match it",
                    func.__qualname__,
                    annotation,
                    name,
                )
        hints[name] = annotation
    return hints


def discover_actions(cls: type) -> list[ActionDescriptor]:
    """Collect the routed actions of a controller class.

    Inherited actions are included; an override in a subclass replaces
    the base definition. Order follows definition order, base classes
    first.

    Raises ``ConfigurationError`` if *cls* is not a ``Controller`` or an
    action template is malformed.
    """
    if not is_controller(cls):
        msg = f"{cls!r} is not a Controller subclass"
        raise ConfigurationError(msg)

    members: dict[str, Callable[..., Any]] = {}
    for klass in reversed(cls.__mro__):
        for attr, value in vars(klass).items():
            if callable(value) and hasattr(value, _ACTION_ATTR):
                members[attr] = value
            elif attr in members:
                # Overridden without @action: no longer routed
                del members[attr]

    name = controller_name(cls)
    prefix = cls.route_prefix if cls.route_prefix is not None else name  # type: ignore[attr-defined]
    descriptors: list[ActionDescriptor] = []
    for attr, func in members.items():
        spec: _ActionSpec = getattr(func, _ACTION_ATTR)
        act = spec.action_name or attr
        template = spec.template if spec.template is not None else act
        parse_path(prefix)
        parse_path(template)
        descriptors.append(
            ActionDescriptor(
                controller_class=cls,
                controller=name,
                controller_namespace=cls.__module__,
                action=act,
                action_arguments=action_arguments(func),
                controller_template=prefix,
                action_template=template,
                methods=frozenset(spec.methods or ("GET",)),
                name=spec.name or f"{name}.{act}",
                handler=func,
            )
        )
    return descriptors


def resolve_action(cls: type, reference: Callable[..., Any]) -> ActionDescriptor:
    """Find the action descriptor a method reference points at.

    Accepts the plain function (``HomeController.book``) or a bound
    method. Raises ``ActionReferenceError`` for anything else.
    """
    func = getattr(reference, "__func__", reference)
    if not callable(func):
        msg = f"Expected an action method of {cls.__name__}, got {reference!r}"
        raise ActionReferenceError(msg)
    for descriptor in discover_actions(cls):
        if descriptor.handler is func:
            return descriptor
    label = getattr(func, "__qualname__", repr(func))
    msg = f"{label} is not an action method of {cls.__name__}"
    raise ActionReferenceError(msg)
