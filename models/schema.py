# Centralized collection and provider names to prevent drift.

# Provider accounts: integrations/{provider}
COL_INTEGRATIONS = "integrations"

PROVIDER_TWILIO = "Twilio"

# Read-only probe target for /health
COL_SYSTEM = "system"
DOC_HEALTHZ = "healthz"
