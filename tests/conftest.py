import argparse
import sys
import xml.etree.ElementTree as ET
from collections.abc import Callable
from pathlib import Path

import pytest

PROJECT_DIR = Path(__file__).resolve().parent.parent
if str(PROJECT_DIR) not in sys.path:
    sys.path.insert(0, str(PROJECT_DIR))

import vkregistry  # noqa: E402


SAMPLE_REGISTRY_XML = """\
<registry>
    <comment>Copyright 2015-2024 The Khronos Group Inc.</comment>
    <comment>This file, vk.xml, is the Vulkan API Registry.</comment>
    <platforms comment="Vulkan platform names, reserved for use with platform- and window system-specific extensions">
        <platform name="xlib" protect="VK_USE_PLATFORM_XLIB_KHR" comment="X Window System, Xlib client library"/>
        <platform name="win32" protect="VK_USE_PLATFORM_WIN32_KHR" comment="Microsoft Win32 API (also refers to Win64 apps)"/>
    </platforms>
    <tags comment="Vulkan vendor/author tags for extensions and layers">
        <tag name="KHR" author="Khronos" contact="Tom Olson @tomolson"/>
        <tag name="EXT" author="Multivendor" contact="Jon Leech @oddhack"/>
    </tags>
    <types comment="Vulkan type definitions">
        <type name="vk_platform" category="include">#include "vk_platform.h"</type>
        <comment>Basic C types, pulled in via vk_platform.h</comment>
        <type requires="vk_platform" name="uint32_t"/>
        <type category="basetype">typedef <type>uint32_t</type> <name>VkBool32</name>;</type>
        <type category="handle" parent="VkInstance" objtypeenum="VK_OBJECT_TYPE_PHYSICAL_DEVICE"><type>VK_DEFINE_HANDLE</type>(<name>VkPhysicalDevice</name>)</type>
        <type name="VkStructureType" category="enum"/>
        <type category="struct" name="VkApplicationInfo">
            <member values="VK_STRUCTURE_TYPE_APPLICATION_INFO"><type>VkStructureType</type> <name>sType</name></member>
            <member optional="true">const <type>void</type>* <name>pNext</name></member>
            <member optional="true" len="null-terminated">const <type>char</type>* <name>pApplicationName</name></member>
        </type>
        <type category="struct" name="VkPhysicalDeviceVulkan11Features" structextends="VkPhysicalDeviceFeatures2,VkDeviceCreateInfo">
            <member values="VK_STRUCTURE_TYPE_PHYSICAL_DEVICE_VULKAN_1_1_FEATURES"><type>VkStructureType</type> <name>sType</name></member>
            <member optional="true"><type>void</type>* <name>pNext</name></member>
        </type>
        <type category="union" name="VkClearColorValue" comment="Union allowing specification of floating point, integer, or unsigned integer color data">
            <member><type>float</type> <name>float32</name>[4]</member>
            <member><type>int32_t</type> <name>int32</name>[4]</member>
        </type>
        <type category="funcpointer"><proto><type>void</type> (VKAPI_PTR *<name>PFN_vkVoidFunction</name>)</proto>(void);</type>
    </types>
    <enums name="API Constants" comment="Vulkan hardcoded constants - not an enumerated type, part of the header boilerplate">
        <enum type="uint32_t" value="256" name="VK_MAX_PHYSICAL_DEVICE_NAME_SIZE"/>
        <enum type="float" value="1000.0F" name="VK_LOD_CLAMP_NONE"/>
    </enums>
    <enums name="VkQueueFlagBits" type="bitmask">
        <enum bitpos="0" name="VK_QUEUE_GRAPHICS_BIT" comment="Queue supports graphics operations"/>
        <enum bitpos="1" name="VK_QUEUE_COMPUTE_BIT"/>
    </enums>
    <commands comment="Vulkan command definitions">
        <command successcodes="VK_SUCCESS" errorcodes="VK_ERROR_OUT_OF_HOST_MEMORY,VK_ERROR_OUT_OF_DEVICE_MEMORY,VK_ERROR_INITIALIZATION_FAILED">
            <proto><type>VkResult</type> <name>vkCreateInstance</name></proto>
            <param>const <type>VkInstanceCreateInfo</type>* <name>pCreateInfo</name></param>
            <param optional="true">const <type>VkAllocationCallbacks</type>* <name>pAllocator</name></param>
            <param><type>VkInstance</type>* <name>pInstance</name></param>
        </command>
        <command queues="graphics" renderpass="inside" cmdbufferlevel="primary,secondary">
            <proto><type>void</type> <name>vkCmdDraw</name></proto>
            <param externsync="true"><type>VkCommandBuffer</type> <name>commandBuffer</name></param>
            <param><type>uint32_t</type> <name>vertexCount</name></param>
        </command>
        <command name="vkGetPhysicalDeviceFeatures2KHR" alias="vkGetPhysicalDeviceFeatures2"/>
    </commands>
    <feature api="vulkan,vulkansc" name="VK_VERSION_1_0" number="1.0" comment="Vulkan core API interface definitions">
        <require comment="Header boilerplate">
            <type name="vk_platform"/>
        </require>
        <require comment="Device initialization">
            <command name="vkCreateInstance"/>
        </require>
    </feature>
    <extensions comment="Vulkan extension interface definitions">
        <extension name="VK_KHR_surface" number="1" type="instance" author="KHR" contact="James Jones @cubanismo,Ian Elliott @ianelliottus" supported="vulkan,vulkansc" ratified="vulkan,vulkansc">
            <require>
                <enum value="25" name="VK_KHR_SURFACE_SPEC_VERSION"/>
                <enum value="&quot;VK_KHR_surface&quot;" name="VK_KHR_SURFACE_EXTENSION_NAME"/>
                <enum offset="0" extends="VkResult" dir="-" name="VK_ERROR_SURFACE_LOST_KHR"/>
                <type name="VkSurfaceKHR"/>
                <command name="vkDestroySurfaceKHR"/>
            </require>
        </extension>
        <extension name="VK_KHR_swapchain" number="2" type="device" requires="VK_KHR_surface" requiresCore="1.1" supported="vulkan" sortorder="1"/>
        <extension name="VK_NV_extension_1" number="1000" type="device" author="NV" supported="disabled" specialuse="debugging,devtools"/>
    </extensions>
    <formats>
        <format name="VK_FORMAT_R4G4_UNORM_PACK8" class="8-bit" blockSize="1" texelsPerBlock="1" packed="8"/>
    </formats>
</registry>
"""

# Registry skeleton with every wrapper block present and empty.
EMPTY_BLOCKS_XML = (
    "<platforms/><tags/><types/><commands/><extensions/>"
)


@pytest.fixture
def make_element() -> Callable[[str], ET.Element]:
    def _make_element(xml: str) -> ET.Element:
        return ET.fromstring(xml)

    return _make_element


@pytest.fixture
def make_registry_root() -> Callable[[str], ET.Element]:
    def _make_registry_root(inner_xml: str) -> ET.Element:
        return ET.fromstring(f"<registry>{inner_xml}</registry>")

    return _make_registry_root


@pytest.fixture
def sample_root() -> ET.Element:
    return ET.fromstring(SAMPLE_REGISTRY_XML)


@pytest.fixture
def sample_registry(sample_root: ET.Element) -> vkregistry.Registry:
    return vkregistry.decode_registry(sample_root)


@pytest.fixture
def sample_vk_xml(tmp_path: Path) -> Path:
    path = tmp_path / "vk.xml"
    path.write_text(SAMPLE_REGISTRY_XML, encoding="utf-8")
    return path


@pytest.fixture
def missing_path(tmp_path: Path) -> Path:
    return tmp_path / "missing"


@pytest.fixture
def make_args(sample_vk_xml: Path) -> Callable[..., argparse.Namespace]:
    def _make_args(**overrides: object) -> argparse.Namespace:
        base_args: dict[str, object] = {
            "vk_xml": sample_vk_xml,
            "write_xml": None,
            "verbose": False,
        }
        base_args.update(overrides)
        return argparse.Namespace(**base_args)

    return _make_args
