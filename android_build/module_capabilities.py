from typing import Optional

from module_descriptor import ModuleDescriptor

ANDROID_LIBRARY = "android-library"
ANDROID_APPLICATION = "android-application"

# plugin id do Gradle -> capability
PLUGIN_CAPABILITIES = {
    "com.android.library": ANDROID_LIBRARY,
    "com.android.application": ANDROID_APPLICATION,
}


def capabilities_from_gradle(content: str):
    """Which capabilities a build.gradle(.kts) declares through its plugin ids."""
    found = []
    for plugin_id, capability in PLUGIN_CAPABILITIES.items():
        if plugin_id in content and capability not in found:
            found.append(capability)
    return found


def has_capability(module: ModuleDescriptor, name: str) -> bool:
    return name in module.capabilities


def android_capability(module: ModuleDescriptor) -> Optional[str]:
    for name in (ANDROID_LIBRARY, ANDROID_APPLICATION):
        if has_capability(module, name):
            return name
    return None
