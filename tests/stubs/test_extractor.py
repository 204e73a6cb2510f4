"""Tests for exported signature extraction."""

from __future__ import annotations

import pytest

from modgen.models import MethodSignature, Parameter
from modgen.parsing.go import FieldGroup, FunctionDecl, GoSourceParser, SyntaxTree
from modgen.stubs.extractor import (
    EXCLUDED_METHODS,
    EXCLUSION_SETS,
    SignatureExtractor,
    exclusion_set,
)
from tests._fixtures.go_sources import ARM_CLIENT, LIFECYCLE_CLIENT


def _decl(name: str, *, params=(), results=()) -> FunctionDecl:
    return FunctionDecl(name=name, receiver="(c *client)", parameters=params, results=results, line=1)


def test_excluded_methods_default_to_lifecycle_set() -> None:
    assert EXCLUDED_METHODS == frozenset({"Close", "Name", "Reconfigure"})
    assert EXCLUSION_SETS["1"] == frozenset({"Close"})


def test_exclusion_set_extends_named_version() -> None:
    assert exclusion_set("1", ["DoCommand"]) == frozenset({"Close", "DoCommand"})
    with pytest.raises(ValueError, match="Unknown exclusion set version"):
        exclusion_set("9")


def test_extractor_skips_lifecycle_and_unexported_functions() -> None:
    tree = GoSourceParser().parse(LIFECYCLE_CLIENT)
    signatures = SignatureExtractor("sensor", "Sensor").extract(tree)

    assert [signature.name for signature in signatures] == ["Readings", "DoCommand"]


def test_extractor_honors_custom_exclusions() -> None:
    tree = GoSourceParser().parse(LIFECYCLE_CLIENT)
    extractor = SignatureExtractor("sensor", "Sensor", excluded=exclusion_set("1"))

    assert [signature.name for signature in extractor.extract(tree)] == [
        "Name",
        "Reconfigure",
        "Readings",
        "DoCommand",
    ]


def test_extractor_normalizes_arm_client() -> None:
    tree = GoSourceParser().parse(ARM_CLIENT)
    signatures = SignatureExtractor("arm", "Arm").extract(tree)

    assert signatures == [
        MethodSignature(
            name="EndPosition",
            parameters=(
                Parameter("ctx", "context.Context"),
                Parameter("extra", "map[string]interface{}"),
            ),
            returns=("spatialmath.Pose", "error"),
        ),
        MethodSignature(
            name="MoveToPosition",
            parameters=(
                Parameter("ctx", "context.Context"),
                Parameter("pose", "spatialmath.Pose"),
                Parameter("extra", "map[string]interface{}"),
            ),
            returns=("error",),
        ),
        MethodSignature(
            name="Properties",
            parameters=(
                Parameter("ctx", "context.Context"),
                Parameter("extra", "map[string]interface{}"),
            ),
            returns=("*arm.Properties", "error"),
        ),
        MethodSignature(
            name="StreamStates",
            parameters=(
                Parameter("ctx", "context.Context"),
                Parameter("names", "...string"),
            ),
            returns=("[]arm.State", "error"),
        ),
    ]


def test_extractor_expands_grouped_names_and_blank_parameters() -> None:
    decl = _decl(
        "Move",
        params=(
            FieldGroup(names=(), type_text="context.Context"),
            FieldGroup(names=("x", "y"), type_text="float64"),
        ),
        results=(FieldGroup(names=("a", "b"), type_text="Pose"),),
    )
    signature = SignatureExtractor("gantry", "Gantry").signature_for(decl)

    assert signature.parameters == (
        Parameter("_", "context.Context"),
        Parameter("x", "float64"),
        Parameter("y", "float64"),
    )
    assert signature.returns == ("gantry.Pose", "gantry.Pose")


def test_extractor_emits_each_name_once() -> None:
    tree = SyntaxTree(
        package="arm",
        functions=[_decl("Stop"), _decl("helper"), _decl("Stop"), _decl("IsMoving")],
    )
    signatures = SignatureExtractor("arm", "Arm").extract(tree)

    assert [signature.name for signature in signatures] == ["Stop", "IsMoving"]


def test_retains_applies_visibility_before_exclusion() -> None:
    extractor = SignatureExtractor("arm", "Arm")
    assert extractor.retains("Stop")
    assert not extractor.retains("stop")
    assert not extractor.retains("Close")
    assert not extractor.retains("")
