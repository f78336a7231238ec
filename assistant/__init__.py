"""Knowledge-base assistant with architecture diagram synthesis."""
