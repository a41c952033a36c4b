"""Application layer - Use cases, ports and pass orchestration."""
