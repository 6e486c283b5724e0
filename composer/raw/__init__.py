"""Raw handling: turning pasted HTML and plain text into blocks."""
