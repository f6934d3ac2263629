"""Tests for the declaration model."""

import pytest
from pydantic import ValidationError

from hdlcraft.errors import DeclarationError
from hdlcraft.model import ComponentAttributes, DeclarationModel, ParameterDecl, ParameterRule, PortDirection
from hdlcraft.model.declaration import (
    constant,
    direct,
    input_port,
    log2_max,
    log2_range,
    output_port,
    register,
    wire,
)


@pytest.fixture
def model():
    return DeclarationModel(
        component="Sample",
        parameters=(
            log2_range("NrOfBits", "upper", "lower"),
            direct("Depth", "depth", default=4),
            constant("Fixed", 5),
        ),
        ports=(
            output_port("Q", "NrOfBits"),
            input_port("D", "NrOfBits"),
            input_port("CLK"),
        ),
        signals=(
            register("s_state", "NrOfBits"),
            wire("s_next", "NrOfBits"),
            wire("s_enable"),
        ),
    )


class TestParameterResolution:
    def test_direct(self):
        assert direct("P", "value").resolve(ComponentAttributes(value=12)) == 12

    def test_direct_default(self):
        assert direct("P", "value", default=1).resolve(ComponentAttributes()) == 1

    def test_direct_missing_attribute(self):
        with pytest.raises(DeclarationError, match="missing attribute"):
            direct("P", "value").resolve(ComponentAttributes())

    def test_direct_rejects_non_integer(self):
        with pytest.raises(DeclarationError):
            direct("P", "value").resolve(ComponentAttributes(value=True))

    @pytest.mark.parametrize(
        "upper, lower, expected",
        [
            (0, 0, 1),
            (1, 0, 1),
            (9, 0, 4),
            (15, 0, 4),
            (16, 0, 5),
            (20, 5, 4),
        ],
    )
    def test_log2_range(self, upper, lower, expected):
        parameter = log2_range("W", "upper", "lower")
        assert parameter.resolve(ComponentAttributes(upper=upper, lower=lower)) == expected

    def test_log2_range_empty(self):
        with pytest.raises(DeclarationError, match="empty"):
            log2_range("W", "upper", "lower").resolve(ComponentAttributes(upper=1, lower=2))

    @pytest.mark.parametrize(
        "high, low, expected",
        [
            (1, 1, 1),
            (3, 2, 2),
            (4, 1, 2),
            (1, 5, 3),
            (256, 1, 8),
        ],
    )
    def test_log2_max(self, high, low, expected):
        parameter = log2_max("NrOfBits", "high", "low")
        assert parameter.resolve(ComponentAttributes(high=high, low=low)) == expected

    def test_constant(self):
        assert constant("C", 3).resolve(ComponentAttributes(anything=1)) == 3

    def test_rule_arity_checked(self):
        with pytest.raises(ValidationError):
            ParameterDecl(name="P", rule=ParameterRule.LOG2_RANGE, attributes=("only_one",))

    def test_constant_needs_value(self):
        with pytest.raises(ValidationError):
            ParameterDecl(name="P", rule=ParameterRule.CONSTANT)


class TestDeclarationModel:
    def test_items_sorted_by_name(self, model):
        assert [p.name for p in model.parameters] == ["Depth", "Fixed", "NrOfBits"]
        assert [p.name for p in model.ports] == ["CLK", "D", "Q"]
        assert [s.name for s in model.signals] == ["s_enable", "s_next", "s_state"]

    def test_port_groups(self, model):
        assert [p.name for p in model.inputs] == ["CLK", "D"]
        assert [p.name for p in model.outputs] == ["Q"]
        assert [w.name for w in model.wires] == ["s_enable", "s_next"]
        assert [r.name for r in model.registers] == ["s_state"]
        assert model.port_names == frozenset({"CLK", "D", "Q"})
        assert model.get_port("Q").direction == PortDirection.OUT
        assert model.get_port("missing") is None

    def test_resolve(self, model):
        resolved = model.resolve(ComponentAttributes(upper=9, lower=0))

        assert resolved.parameters == {"Depth": 4, "Fixed": 5, "NrOfBits": 4}
        assert resolved.inputs == {"CLK": 1, "D": 4}
        assert resolved.outputs == {"Q": 4}
        assert resolved.wires == {"s_enable": 1, "s_next": 4}
        assert resolved.registers == {"s_state": 4}
        assert list(resolved.ports) == ["CLK", "D", "Q"]

    def test_resolve_reports_component(self, model):
        with pytest.raises(DeclarationError, match="Component: Sample"):
            model.resolve(ComponentAttributes(upper=9))

    def test_resolve_is_deterministic(self, model):
        attributes = ComponentAttributes(lower=0, upper=100)
        assert model.resolve(attributes) == model.resolve(ComponentAttributes(upper=100, lower=0))

    def test_declaration_order_does_not_matter(self, model):
        reordered = DeclarationModel(
            component="Sample",
            parameters=tuple(reversed(model.parameters)),
            ports=tuple(reversed(model.ports)),
            signals=tuple(reversed(model.signals)),
        )
        assert reordered == model

    def test_duplicate_names_rejected(self):
        with pytest.raises(DeclarationError, match="Duplicate"):
            DeclarationModel(component="Bad", ports=(input_port("A"), output_port("A")))

    def test_unknown_width_reference_rejected(self):
        with pytest.raises(DeclarationError, match="undeclared parameter"):
            DeclarationModel(component="Bad", ports=(input_port("A", "Width"),))

    def test_immutable(self, model):
        with pytest.raises(ValidationError):
            model.component = "Other"

    def test_non_positive_width_rejected(self):
        with pytest.raises(ValidationError):
            input_port("A", 0)
