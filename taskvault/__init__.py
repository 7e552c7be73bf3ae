"""taskvault - private task lists behind signed sessions."""
