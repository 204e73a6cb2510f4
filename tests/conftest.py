from __future__ import annotations

import pytest

from modgen.models import ModuleDescriptor


@pytest.fixture
def arm_module() -> ModuleDescriptor:
    """Descriptor for a `my-module` arm component with model `my-model`."""
    return ModuleDescriptor(
        module_name="my-module",
        namespace="my-org",
        resource_type="component",
        resource_subtype="arm",
        model_name="my-model",
        sdk_version="0.44.0",
    )
