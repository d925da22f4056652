"""Job board core: sessions, listings, applications and notifications."""
