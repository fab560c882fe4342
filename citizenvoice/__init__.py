"""CitizenVoice backend and client SDK."""
