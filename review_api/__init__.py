"""Review API: contacts, users, restaurants and their reviews."""
