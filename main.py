#!/usr/bin/env python3
"""
Main entry point for the mock Twitch chat server
"""

from tmi_mock.main import run

if __name__ == "__main__":
    run()
