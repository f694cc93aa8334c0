"""Teacher data sync - cache, services and orchestration."""
