"""Behaviour shared by every DirectoryStore adapter."""
