"""Constants for the Azure audit exporter."""

# Version
VERSION = "0.3.0"
AUTHOR = "webdevops.io"

# Server defaults
DEFAULT_SERVER_BIND = ":8080"
DEFAULT_METRICS_PATH = "/metrics"
DEFAULT_SCRAPE_TIME = "5m"

# Collection defaults
DEFAULT_AZURE_LOCATIONS = ["westeurope", "northeurope"]
DEFAULT_TASK_TIMEOUT_SECONDS = 300.0
DEFAULT_PARALLEL_WORKERS = 16

# Azure management scope
AZURE_MGMT_SCOPE = "https://management.azure.com/.default"

# Security Center compliance snapshots are named by UTC date
COMPLIANCE_NAME_FORMAT = "%Y-%m-%dZ"

# Metric names
METRIC_SUBSCRIPTION_INFO = "azurerm_subscription_info"
METRIC_RESOURCEGROUP_INFO = "azurerm_resourcegroup_info"
METRIC_SECURITYCENTER_COMPLIANCE = "azurerm_securitycenter_compliance"
METRIC_ADVISOR_RECOMMENDATION = "azurerm_advisor_recommendation"

# Exit codes
EXIT_ERROR = 1
EXIT_KEYBOARD_INTERRUPT = 130

# Messages
INFO_OPERATION_CANCELLED = "Operation cancelled by user"
INFO_RUN_WITH_VERBOSE = "Run with --verbose for more information"
ERROR_STARTUP = "Startup failed: {}"
ERROR_UNEXPECTED = "Unexpected error: {}"
