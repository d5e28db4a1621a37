"""Core data types and exceptions shared by the supervisor and upload pipeline."""
