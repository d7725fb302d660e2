"""Core domain logic for task-cli: task models, storage, and configuration."""
