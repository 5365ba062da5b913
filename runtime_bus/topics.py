"""Topic constants for the runtime bus."""

# Platform services (request/reply)
PLATFORM_PACKAGE_RESOLVE_REQUEST = "platform.package.resolve.request"
PLATFORM_ADMINS_GET_REQUEST = "platform.device_policy.admins.get.request"
PLATFORM_USERS_COUNT_REQUEST = "platform.users.count.request"
PLATFORM_STORAGE_STATS_REQUEST = "platform.storage.stats.request"
PLATFORM_BATTERY_USAGE_REQUEST = "platform.battery.usage.request"
PLATFORM_RUNNING_GET_REQUEST = "platform.process.running.get.request"

# App details events
APP_DETAILS_DECISIONS_READY = "app_details.decisions.ready"
APP_DETAILS_CLOSE_REQUEST = "app_details.close.request"
APP_DETAILS_BATTERY_OPEN_REQUEST = "app_details.battery.open.request"
APP_DETAILS_ACTION_REQUEST = "app_details.action.request"
