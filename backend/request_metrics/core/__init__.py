"""Framework-agnostic interception and classification logic."""
