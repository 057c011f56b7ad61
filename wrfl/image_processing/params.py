# -*- coding: utf-8 -*-
"""
Tunable Parameter Annotations - Declarative processor parameters.

Constraint markers (``Range``, ``Options``, ``Desc``) go inside
``typing.Annotated`` class-body annotations of ``ImageProcessor``
subclasses. ``collect_param_specs`` turns them into ``ParamSpec`` objects
when the class is created and ``_make_init`` builds a keyword-only
``__init__`` that validates every value.

Usage
-----
::

    from typing import Annotated
    from wrfl.image_processing.params import Desc, Options, Range

    class MyFilter(ImageTransform):
        kernel_size: Annotated[int, Range(min=1, max=31),
                               Desc('Window side (odd)')] = 3
        border: Annotated[str, Options('full', 'crop'),
                          Desc('Border mode')] = 'full'

Author
------
Steven Siebert

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-18

Modified
--------
2026-10-18
"""

# Standard library
import inspect
from typing import (
    Annotated,
    Any,
    Optional,
    Tuple,
    Union,
    get_origin,
    get_type_hints,
)

# WRFL internal
from wrfl.exceptions import ValidationError


Number = Union[int, float]


class ParamMeta:
    """Base marker; an ``Annotated`` field carrying one is a tunable."""


class Range(ParamMeta):
    """Inclusive numeric bounds, either side optional."""

    __slots__ = ('min', 'max')

    def __init__(self, min: Optional[Number] = None,
                 max: Optional[Number] = None) -> None:
        self.min = min
        self.max = max

    def __repr__(self) -> str:
        bounds = [f"{key}={value!r}"
                  for key, value in (('min', self.min), ('max', self.max))
                  if value is not None]
        return f"Range({', '.join(bounds)})"


class Options(ParamMeta):
    """Closed set of allowed values."""

    __slots__ = ('choices',)

    def __init__(self, *choices: Any) -> None:
        if not choices:
            raise ValueError("Options requires at least one choice")
        self.choices = choices

    def __repr__(self) -> str:
        return f"Options{self.choices!r}"


class Desc(ParamMeta):
    """Human-readable description."""

    __slots__ = ('text',)

    def __init__(self, text: str) -> None:
        self.text = text

    def __repr__(self) -> str:
        return f"Desc({self.text!r})"


_MISSING = object()


class ParamSpec:
    """Introspected description of one tunable parameter.

    Attributes
    ----------
    name : str
        Keyword-argument name.
    param_type : type
        Expected type; ``int`` values are accepted for ``float``.
    default : Any
        Default value (``None`` when the parameter is required).
    description : str
        Text of the ``Desc`` marker.
    min_value, max_value : int, float, or None
        ``Range`` bounds.
    choices : tuple or None
        ``Options`` values.
    """

    __slots__ = ('name', 'param_type', 'default', 'has_default',
                 'description', 'min_value', 'max_value', 'choices')

    def __init__(self, name: str, param_type: type, default: Any,
                 has_default: bool, description: str = '',
                 min_value: Optional[Number] = None,
                 max_value: Optional[Number] = None,
                 choices: Optional[Tuple] = None) -> None:
        self.name = name
        self.param_type = param_type
        self.default = default
        self.has_default = has_default
        self.description = description
        self.min_value = min_value
        self.max_value = max_value
        self.choices = choices

    @property
    def required(self) -> bool:
        return not self.has_default

    def validate(self, value: Any) -> None:
        """Check *value* against the type, bounds and choices.

        Raises
        ------
        TypeError
            If *value* has the wrong type.
        ValidationError
            If *value* is out of range or not an allowed choice.
        """
        expected = (int, float) if self.param_type is float else self.param_type
        if self.param_type is not object and (
                not isinstance(value, expected)
                or (isinstance(value, bool) and self.param_type is not bool)):
            raise TypeError(
                f"Parameter '{self.name}' must be "
                f"{self.param_type.__name__}, got {type(value).__name__}"
            )
        if self.min_value is not None and value < self.min_value:
            raise ValidationError(
                f"Parameter '{self.name}' value {value!r} "
                f"is below minimum {self.min_value!r}"
            )
        if self.max_value is not None and value > self.max_value:
            raise ValidationError(
                f"Parameter '{self.name}' value {value!r} "
                f"is above maximum {self.max_value!r}"
            )
        if self.choices is not None and value not in self.choices:
            raise ValidationError(
                f"Parameter '{self.name}' value {value!r} "
                f"is not in allowed choices {self.choices!r}"
            )

    def __repr__(self) -> str:
        text = (f"ParamSpec(name={self.name!r}, "
                f"param_type={self.param_type.__name__}")
        if self.has_default:
            text += f", default={self.default!r}"
        if self.choices is not None:
            text += f", choices={self.choices!r}"
        return text + ")"


def collect_param_specs(cls: type) -> Tuple[ParamSpec, ...]:
    """Collect the ``Annotated`` tunables of *cls*, parents first.

    Raises
    ------
    TypeError
        If a field combines ``Range`` and ``Options``.
    """
    try:
        hints = get_type_hints(cls, include_extras=True)
    except (NameError, TypeError):
        return ()

    names = []
    for klass in reversed(cls.__mro__):
        for name in inspect.get_annotations(klass):
            if name in hints and name not in names:
                names.append(name)

    specs = []
    for name in names:
        hint = hints[name]
        if get_origin(hint) is not Annotated:
            continue
        markers = [m for m in hint.__metadata__ if isinstance(m, ParamMeta)]
        if not markers:
            continue
        bounds = next((m for m in markers if isinstance(m, Range)), None)
        options = next((m for m in markers if isinstance(m, Options)), None)
        desc = next((m for m in markers if isinstance(m, Desc)), None)
        if bounds is not None and options is not None:
            raise TypeError(
                f"Parameter '{name}' on {cls.__qualname__}: "
                f"Range and Options are mutually exclusive."
            )
        default = getattr(cls, name, _MISSING)
        specs.append(ParamSpec(
            name=name,
            param_type=hint.__args__[0],
            default=None if default is _MISSING else default,
            has_default=default is not _MISSING,
            description=desc.text if desc else '',
            min_value=bounds.min if bounds else None,
            max_value=bounds.max if bounds else None,
            choices=options.choices if options else None,
        ))
    return tuple(specs)


def _make_init(param_specs: Tuple[ParamSpec, ...]):
    """Build a keyword-only ``__init__`` validating every tunable.

    The generated initializer calls ``self.__post_init__()`` when the
    class defines one.
    """

    def __init__(self, **kwargs):
        unexpected = set(kwargs) - {spec.name for spec in param_specs}
        if unexpected:
            raise TypeError(
                f"{type(self).__name__}() got unexpected "
                f"keyword arguments: {', '.join(sorted(unexpected))}"
            )
        for spec in param_specs:
            if spec.name in kwargs:
                value = kwargs[spec.name]
            elif spec.has_default:
                value = spec.default
            else:
                raise TypeError(
                    f"{type(self).__name__}() missing required "
                    f"keyword argument: '{spec.name}'"
                )
            spec.validate(value)
            setattr(self, spec.name, value)
        if hasattr(self, '__post_init__'):
            self.__post_init__()

    parameters = [inspect.Parameter('self',
                                    inspect.Parameter.POSITIONAL_OR_KEYWORD)]
    for spec in param_specs:
        parameters.append(inspect.Parameter(
            spec.name, inspect.Parameter.KEYWORD_ONLY,
            default=spec.default if spec.has_default
            else inspect.Parameter.empty,
        ))
    __init__.__signature__ = inspect.Signature(parameters)
    __init__.__qualname__ = '__init__'
    return __init__
