"""Pure rules shared by the backend and the client SDK."""
