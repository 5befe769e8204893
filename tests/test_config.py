import logging
import math

import numpy as np
import pytest

from pysymlog.config import (
    DEFAULT_SPLIT_NUMBER,
    NiceExtentOptions,
    ScaleConfig,
    resolve_number,
)


class TestResolveNumber:
    """Numeric settings resolve to finite floats or the default."""

    @pytest.mark.parametrize("value", [None, "ten", "10", math.nan, math.inf, True, False])
    def test_falls_back(self, value):
        assert resolve_number(value, 7.0) == 7.0

    def test_accepts_real_numbers(self):
        assert resolve_number(2, 10.0) == 2.0
        assert isinstance(resolve_number(2, 10.0), float)
        assert resolve_number(0.5, 10.0) == 0.5
        assert resolve_number(np.float64(3.0), 10.0) == 3.0


class TestScaleConfig:
    def test_defaults_produce_empty_setting(self):
        cfg = ScaleConfig()
        cfg.validate()
        assert cfg.to_setting() == {}

    def test_to_setting_keeps_explicit_values(self):
        cfg = ScaleConfig(base=2, C=0.5)
        cfg.validate()
        assert cfg.to_setting() == {"base": 2, "C": 0.5}

    @pytest.mark.parametrize("base", [0, -2, 1, math.inf, math.nan])
    def test_invalid_base(self, base):
        with pytest.raises(ValueError):
            ScaleConfig(base=base).validate()

    @pytest.mark.parametrize("C", [0, -0.1, math.inf, math.nan])
    def test_invalid_c(self, C):
        with pytest.raises(ValueError):
            ScaleConfig(C=C).validate()

    def test_get_logger_default(self):
        assert ScaleConfig().get_logger().name == "pysymlog"

    def test_get_logger_applies_level(self):
        logger = logging.getLogger("pysymlog.tests.config")
        cfg = ScaleConfig(logger=logger, log_level=logging.DEBUG)
        assert cfg.get_logger() is logger
        assert logger.level == logging.DEBUG


class TestNiceExtentOptions:
    def test_none_gives_defaults(self):
        opts = NiceExtentOptions.from_options(None)
        assert opts == NiceExtentOptions()
        assert opts.split_number == DEFAULT_SPLIT_NUMBER

    def test_instance_returned_as_is(self):
        opts = NiceExtentOptions(split_number=3)
        assert NiceExtentOptions.from_options(opts) is opts

    def test_from_mapping(self):
        opts = NiceExtentOptions.from_options(
            {"split_number": 8, "fix_min": 1, "min_interval": 0.5}
        )
        assert opts.split_number == 8
        assert opts.fix_min is True
        assert opts.fix_max is False
        assert opts.min_interval == 0.5
        assert opts.max_interval is None

    def test_zero_split_number_uses_default(self):
        opts = NiceExtentOptions.from_options({"split_number": 0})
        assert opts.split_number == DEFAULT_SPLIT_NUMBER

    def test_unsupported_type(self):
        with pytest.raises(TypeError):
            NiceExtentOptions.from_options("split=5")
