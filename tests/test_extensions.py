import xml.etree.ElementTree as ET
from collections.abc import Callable

import pytest

import vkregistry


def test_disabled_profile_ignores_target(
    make_element: Callable[[str], ET.Element],
) -> None:
    node = make_element(
        '<extension name="VK_NV_extension_1" number="1" type="device" supported="disabled"/>'
    )

    assert vkregistry.decode_extension(node).profile == vkregistry.DisabledProfile()


def test_disabled_profile_does_not_validate_target() -> None:
    assert vkregistry.resolve_profile("disabled", "bogus") == vkregistry.DisabledProfile()


@pytest.mark.parametrize("supported", ["vulkan,vulkansc", "vulkansc,vulkan"])
def test_enabled_profile_lists_vulkansc_first(supported: str) -> None:
    profile = vkregistry.resolve_profile(supported, "instance")

    assert profile == vkregistry.EnabledProfile(
        apis=(
            vkregistry.VulkanScApi(target=vkregistry.Target.INSTANCE),
            vkregistry.VulkanApi(target=vkregistry.Target.INSTANCE),
        )
    )


def test_enabled_profile_without_target() -> None:
    assert vkregistry.resolve_profile("vulkan", None) == vkregistry.EnabledProfile(
        apis=(vkregistry.VulkanApi(target=None),)
    )


def test_enabled_profile_drops_unknown_tokens() -> None:
    profile = vkregistry.resolve_profile("vulkan,openxr", "device")

    assert profile == vkregistry.EnabledProfile(
        apis=(vkregistry.VulkanApi(target=vkregistry.Target.DEVICE),)
    )
    assert vkregistry.resolve_profile("openxr", None) == vkregistry.EnabledProfile()


def test_enabled_profile_rejects_unknown_target() -> None:
    with pytest.raises(vkregistry.DecodeError) as exc_info:
        vkregistry.resolve_profile("vulkan", "layer", "VK_EXT_foo")

    assert exc_info.value.code == "UNRECOGNIZED_DISCRIMINANT"
    assert exc_info.value.key == "type"
    assert exc_info.value.name == "VK_EXT_foo"


def test_extension_defaults(make_element: Callable[[str], ET.Element]) -> None:
    node = make_element('<extension name="VK_KHR_surface" number="1" supported="vulkan"/>')

    extension = vkregistry.decode_extension(node)

    assert extension.sort_order == "0"
    assert extension.requires_core == "1.0"
    assert extension.required_extensions is None
    assert extension.require is None
    assert extension.remove is None
    assert extension.provisional is False
    assert extension.special_use is None


def test_extension_full_attribute_set(make_element: Callable[[str], ET.Element]) -> None:
    node = make_element(
        """
        <extension name="VK_KHR_portability_subset" number="164" type="device"
                   requires="VK_KHR_get_physical_device_properties2,VK_KHR_surface"
                   requiresCore="1.1" sortorder="2" author="KHR" contact="Bill Hollings @billhollings"
                   platform="provisional" protect="VK_ENABLE_BETA_EXTENSIONS"
                   depends="VK_KHR_get_physical_device_properties2" promotedto="VK_VERSION_1_3"
                   deprecatedby="" obsoletedby="VK_KHR_other" provisional="true"
                   specialuse="devtools,debugging" supported="vulkan" comment="Portability">
            <require comment="Types" depends="VK_VERSION_1_1" api="vulkan">
                <enum value="1" name="VK_KHR_PORTABILITY_SUBSET_SPEC_VERSION"/>
                <type name="VkPhysicalDevicePortabilitySubsetFeaturesKHR"/>
            </require>
            <remove>
                <command name="vkObsolete"/>
            </remove>
        </extension>
        """
    )

    extension = vkregistry.decode_extension(node)

    assert extension.name == "VK_KHR_portability_subset"
    assert extension.number == "164"
    assert extension.sort_order == "2"
    assert extension.requires_core == "1.1"
    assert extension.required_extensions == (
        "VK_KHR_get_physical_device_properties2",
        "VK_KHR_surface",
    )
    assert extension.author == "KHR"
    assert extension.contact == "Bill Hollings @billhollings"
    assert extension.platform == "provisional"
    assert extension.protect == "VK_ENABLE_BETA_EXTENSIONS"
    assert extension.depends == "VK_KHR_get_physical_device_properties2"
    assert extension.promoted_to == "VK_VERSION_1_3"
    assert extension.deprecated_by == ""
    assert extension.obsoleted_by == "VK_KHR_other"
    assert extension.provisional is True
    assert extension.special_use == ("devtools", "debugging")
    assert extension.comment == "Portability"
    assert extension.require == (
        vkregistry.Definitions(
            constants=(
                vkregistry.Constant(name="VK_KHR_PORTABILITY_SUBSET_SPEC_VERSION", value="1"),
            ),
            types=(vkregistry.Typedef(name="VkPhysicalDevicePortabilitySubsetFeaturesKHR"),),
            api="vulkan",
            comment="Types",
            depends="VK_VERSION_1_1",
        ),
    )
    assert extension.remove == (
        vkregistry.Definitions(commands=(vkregistry.Command(name="vkObsolete"),)),
    )


@pytest.mark.parametrize("missing", ["name", "number", "supported"])
def test_extension_missing_required_attribute(
    make_element: Callable[[str], ET.Element],
    missing: str,
) -> None:
    attributes = {"name": "VK_KHR_surface", "number": "1", "supported": "vulkan"}
    del attributes[missing]
    node = ET.Element("extension", attributes)

    with pytest.raises(vkregistry.DecodeError) as exc_info:
        vkregistry.decode_extension(node)

    assert exc_info.value.code == "MISSING_REQUIRED_FIELD"
    assert exc_info.value.key == missing


def test_definitions_defaults_to_empty_collections(
    make_element: Callable[[str], ET.Element],
) -> None:
    definitions = vkregistry.decode_definitions(make_element("<require/>"))

    assert definitions == vkregistry.Definitions()
    assert definitions.constants == ()
    assert definitions.types == ()
    assert definitions.commands == ()


def test_feature_decodes_apis_and_blocks(
    make_element: Callable[[str], ET.Element],
) -> None:
    node = make_element(
        """
        <feature api="vulkan,vulkansc" name="VK_VERSION_1_1" number="1.1"
                 depends="VK_VERSION_1_0" comment="Vulkan 1.1 core API">
            <require comment="Promoted from VK_KHR_device_group">
                <command name="vkGetDeviceGroupPeerMemoryFeatures"/>
            </require>
        </feature>
        """
    )

    feature = vkregistry.decode_feature(node)

    assert feature.apis == (vkregistry.FeatureApi.VULKAN, vkregistry.FeatureApi.VULKANSC)
    assert feature.name == "VK_VERSION_1_1"
    assert feature.number == "1.1"
    assert feature.depends == "VK_VERSION_1_0"
    assert feature.comment == "Vulkan 1.1 core API"
    assert feature.sort_order == "0"
    assert feature.remove is None
    assert feature.require == (
        vkregistry.Definitions(
            commands=(vkregistry.Command(name="vkGetDeviceGroupPeerMemoryFeatures"),),
            comment="Promoted from VK_KHR_device_group",
        ),
    )


def test_feature_unknown_api_is_rejected(
    make_element: Callable[[str], ET.Element],
) -> None:
    node = make_element('<feature api="vulkan,gles2" name="VK_VERSION_1_0" number="1.0"/>')

    with pytest.raises(vkregistry.DecodeError) as exc_info:
        vkregistry.decode_feature(node)

    assert exc_info.value.code == "UNRECOGNIZED_DISCRIMINANT"
    assert exc_info.value.value == "gles2"
    assert exc_info.value.key == "api"


def test_feature_requires_api(make_element: Callable[[str], ET.Element]) -> None:
    with pytest.raises(vkregistry.DecodeError) as exc_info:
        vkregistry.decode_feature(make_element('<feature name="VK_VERSION_1_0" number="1.0"/>'))

    assert exc_info.value.code == "MISSING_REQUIRED_FIELD"
    assert exc_info.value.key == "api"


@pytest.mark.parametrize("block", ["require", "remove"])
def test_extension_nested_error_names_extension(
    make_element: Callable[[str], ET.Element],
    block: str,
) -> None:
    node = make_element(
        f'<extension name="VK_KHR_foo" number="1" supported="vulkan">'
        f'<{block}><enum value="1"/></{block}></extension>'
    )

    with pytest.raises(vkregistry.DecodeError) as exc_info:
        vkregistry.decode_extension(node)

    err = exc_info.value
    assert err.code == "MISSING_REQUIRED_FIELD"
    assert err.entity == "enum"
    assert "VK_KHR_foo" in err.message


def test_feature_nested_error_names_feature(
    make_element: Callable[[str], ET.Element],
) -> None:
    node = make_element(
        '<feature api="vulkan" name="VK_VERSION_1_2" number="1.2">'
        '<require><command alias="vkFoo"/></require></feature>'
    )

    with pytest.raises(vkregistry.DecodeError) as exc_info:
        vkregistry.decode_feature(node)

    err = exc_info.value
    assert err.code == "STRUCTURAL_MISMATCH"
    assert err.entity == "command"
    assert "VK_VERSION_1_2" in err.message


def test_definitions_without_parent_keeps_message(
    make_element: Callable[[str], ET.Element],
) -> None:
    with pytest.raises(vkregistry.DecodeError) as exc_info:
        vkregistry.decode_definitions(make_element('<require><enum value="1"/></require>'))

    assert exc_info.value.message == "<enum> is missing required 'name'"
