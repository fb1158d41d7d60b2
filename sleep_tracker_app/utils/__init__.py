# Utilities package
# Don't import here to avoid circular imports with the core package.
# Import directly where needed:
#   - from sleep_tracker_app.utils.formatting import format_sessions, quality_label
#   - from sleep_tracker_app.utils.resource_resolver import get_config_path, get_database_path

__all__ = []
