"""
Message catalogue for trace and error text.

Messages are looked up by key and formatted with ``str.format`` keyword
arguments. Only en-US text is shipped.
"""

MESSAGES: dict[str, str] = {
    "resource_in_desired_state": "Resource '{name}' is in the desired state.",
    "resource_not_in_desired_state": "Resource '{name}' is NOT in the desired state.",
    "resource_property_mismatch": (
        "Property '{property}' is NOT in the desired state; expected '{expected}', actual '{actual}'."
    ),
    "immutable_property": (
        "Property '{property}' cannot be changed after the application is created "
        "(current '{actual}', desired '{expected}'). Remove and recreate the application."
    ),
    "desktop_group_not_found": "Desktop group '{desktop_group}' was not found.",
    "application_not_found": "Application '{name}' was not found in desktop group '{desktop_group}'.",
    "adding_application": "Adding application '{name}' to desktop group '{desktop_group}'.",
    "updating_application": "Updating application '{name}' properties: {properties}.",
    "removing_application": "Removing application '{name}' from desktop group '{desktop_group}'.",
    "no_action_required": "Application '{name}' is absent and desired absent; nothing to do.",
    "resolving_icon": "Resolving icon from '{path}'.",
    "icon_not_resolved": "Unable to resolve an icon from '{path}'.",
    "invoking_remote_operation": "Invoking '{operation}' against '{base_url}'.",
    "invoking_remote_operation_as": "Invoking '{operation}' against '{base_url}' as '{username}'.",
}


def format_message(key: str, **kwargs: object) -> str:
    """
    Format a catalogue message.

    Args:
        key: Message key
        **kwargs: Values substituted into the message

    Returns:
        Formatted message text

    Raises:
        KeyError: If the key is not in the catalogue
    """
    return MESSAGES[key].format(**kwargs)
