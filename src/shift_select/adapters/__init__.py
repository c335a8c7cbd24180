"""Host adapters embedding the selection engine in a UI toolkit."""
