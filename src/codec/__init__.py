"""Borsh-equivalent binary codec built on construct."""
