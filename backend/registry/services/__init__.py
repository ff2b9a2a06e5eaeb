"""Service Layer — the imperative shell that serializes and persists registry mutations."""
