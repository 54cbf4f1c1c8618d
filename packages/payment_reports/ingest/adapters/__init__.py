"""Row -> record adapters for supported input exports."""
