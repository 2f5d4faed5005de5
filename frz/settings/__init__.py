"""Configuration sources, validation and resolved settings."""