"""Client-side adapter for QQ bot message events."""
