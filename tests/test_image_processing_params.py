# -*- coding: utf-8 -*-
"""
Tunable Parameter Tests.

Tests for the ``typing.Annotated`` tunables of the window filter
processors: the Range, Options and Desc markers, ParamSpec validation,
annotation collection, the generated keyword-only ``__init__``, the
``__post_init__`` hook, per-call overrides and processor versioning.

Author
------
Duane Smalley, PhD
duane.d.smalley@gmail.com

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

import inspect
import warnings
from typing import Annotated

import numpy as np
import pytest

from wrfl.exceptions import ValidationError
from wrfl.image_processing.base import ImageProcessor, ImageTransform
from wrfl.image_processing.params import (
    Desc,
    Options,
    ParamMeta,
    ParamSpec,
    Range,
    collect_param_specs,
)
from wrfl.image_processing.versioning import processor_tags, processor_version
from wrfl.vocabulary import ProcessorCategory


# ---------------------------------------------------------------------------
# Markers and specs
# ---------------------------------------------------------------------------

class TestMarkers:
    """Test constraint markers."""

    def test_range(self):
        r = Range(min=1)
        assert r.min == 1 and r.max is None
        assert isinstance(r, ParamMeta)
        assert repr(r) == 'Range(min=1)'

    def test_options(self):
        assert Options('a', 'b').choices == ('a', 'b')

    def test_options_empty_raises(self):
        with pytest.raises(ValueError, match="at least one"):
            Options()

    def test_desc(self):
        assert Desc('window side').text == 'window side'


class TestParamSpec:
    """Test ParamSpec validation."""

    def test_int_accepted_for_float(self):
        ParamSpec('sigma', float, 1.0, True).validate(2)

    def test_bool_rejected_for_int(self):
        spec = ParamSpec('radius', int, 1, True)
        with pytest.raises(TypeError, match="radius"):
            spec.validate(True)

    def test_wrong_type(self):
        with pytest.raises(TypeError):
            ParamSpec('mode', str, 'median', True).validate(3)

    def test_range(self):
        spec = ParamSpec('size', int, 3, True, min_value=1, max_value=31)
        spec.validate(31)
        with pytest.raises(ValidationError, match="above maximum"):
            spec.validate(33)
        with pytest.raises(ValidationError, match="below minimum"):
            spec.validate(0)

    def test_choices(self):
        spec = ParamSpec('border', str, 'zero', True,
                         choices=('zero', 'copy'))
        with pytest.raises(ValidationError, match="allowed choices"):
            spec.validate('crop')

    def test_required(self):
        assert ParamSpec('w', object, None, False).required


# ---------------------------------------------------------------------------
# Annotation collection and generated __init__
# ---------------------------------------------------------------------------

@processor_version('0.1.0')
class _Smoother(ImageTransform):
    size: Annotated[int, Range(min=1, max=31), Desc('Window side')] = 3
    border: Annotated[str, Options('zero', 'copy')] = 'zero'
    label: str = 'plain annotation, not a tunable'

    def apply(self, source, **kwargs):
        params = self._resolve_params(kwargs)
        return np.full(source.shape, params['size'])


@processor_version('0.1.0')
class _OddSmoother(_Smoother):
    weight: Annotated[float, Range(min=0.0)] = 1.0

    def __post_init__(self):
        if self.size % 2 == 0:
            raise ValidationError("size must be odd")


class TestCollection:
    """Test ``__init_subclass__`` spec collection."""

    def test_specs_in_declaration_order(self):
        names = [s.name for s in _Smoother.__param_specs__]
        assert names == ['size', 'border']

    def test_spec_contents(self):
        size = _Smoother.__param_specs__[0]
        assert size.param_type is int
        assert (size.min_value, size.max_value) == (1, 31)
        assert size.description == 'Window side'
        assert _Smoother.__param_specs__[1].choices == ('zero', 'copy')

    def test_inherited_specs_come_first(self):
        names = [s.name for s in collect_param_specs(_OddSmoother)]
        assert names == ['size', 'border', 'weight']

    def test_range_and_options_exclusive(self):
        with pytest.raises(TypeError, match="mutually exclusive"):
            class _Bad(ImageTransform):
                x: Annotated[int, Range(min=0), Options(1, 2)] = 1

                def apply(self, source, **kwargs):
                    return source


class TestGeneratedInit:
    """Test the keyword-only initializer."""

    def test_defaults(self):
        s = _Smoother()
        assert s.size == 3 and s.border == 'zero'

    def test_keyword_only_signature(self):
        sig = inspect.signature(_Smoother.__init__)
        assert sig.parameters['size'].kind is inspect.Parameter.KEYWORD_ONLY
        assert sig.parameters['size'].default == 3

    def test_unexpected_keyword(self):
        with pytest.raises(TypeError, match="unexpected"):
            _Smoother(radius=2)

    def test_validation_at_init(self):
        with pytest.raises(ValidationError):
            _Smoother(border='crop')

    def test_post_init_hook(self):
        assert _OddSmoother(size=5).size == 5
        with pytest.raises(ValidationError, match="odd"):
            _OddSmoother(size=4)


class TestResolveParams:
    """Test per-call overrides."""

    def test_override_wins(self):
        s = _Smoother(size=5)
        assert s.apply(np.zeros((2, 2)))[0, 0] == 5
        assert s.apply(np.zeros((2, 2)), size=7)[0, 0] == 7
        assert s.size == 5

    def test_override_validated(self):
        with pytest.raises(ValidationError):
            _Smoother().apply(np.zeros((2, 2)), size=40)

    def test_unknown_keys_ignored(self):
        assert _Smoother().apply(np.zeros((1, 1)), colour='red')[0, 0] == 3


# ---------------------------------------------------------------------------
# Versioning
# ---------------------------------------------------------------------------

class TestVersioning:
    """Test version and tag decorators."""

    def test_version_stamped(self):
        assert _Smoother.__processor_version__ == '0.1.0'

    def test_tags(self):
        @processor_tags(category=ProcessorCategory.FILTERS,
                        description='demo')
        class _Tagged:
            pass

        assert _Tagged.__processor_tags__ == {
            'category': ProcessorCategory.FILTERS,
            'description': 'demo',
        }

    def test_tags_reject_strings(self):
        with pytest.raises(TypeError):
            processor_tags(category='filters')

    def test_missing_version_warns_once(self):
        class _Unversioned(ImageTransform):
            def apply(self, source, **kwargs):
                return source

        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter('always')
            _Unversioned()
            _Unversioned()
        messages = [w for w in caught if 'processor version' in str(w.message)]
        assert len(messages) == 1

    def test_abstract_subclass_is_not_instantiable(self):
        with pytest.raises(TypeError):
            ImageTransform()

    def test_all_processors_are_image_processors(self):
        assert issubclass(_Smoother, ImageProcessor)
