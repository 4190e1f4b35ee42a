"""Console client for the global chat."""
import json
import os
import sys
import time
from getpass import getpass
from typing import List, Optional, Set

import requests

from . import api
from .models import ChatMessage

POLL_INTERVAL = 2.0


class ChatClient:
    """Interactive console client that polls the shared message log."""

    def __init__(self, server_url: str, api_client: Optional[api.APIClient] = None):
        self.api = api_client or api.APIClient(server_url)
        self.seen_ids: Set[int] = set()
        self.username = None

    def login(self) -> bool:
        print("=== Login ===")
        username = input("Username: ").strip()
        password = getpass("Password: ")
        try:
            self.api.login(username, password)
        except (api.AuthenticationError, requests.RequestException) as exc:
            print(f"Login failed: {exc}")
            return False
        self.username = username
        self.seen_ids.clear()
        print(f"Welcome, {username}!")
        return True

    def send(self, text: str) -> None:
        if not text.strip():
            print("Message is empty.")
            return
        try:
            self.api.send_message(text)
        except requests.RequestException as exc:
            print(f"Failed to send message: {exc}")

    def refresh(self) -> List[ChatMessage]:
        """Print messages not shown yet and return them."""
        messages = [ChatMessage.from_json(raw) for raw in self.api.get_messages()]
        fresh = [msg for msg in messages if msg.id not in self.seen_ids]
        for msg in fresh:
            print(msg.render())
            self.seen_ids.add(msg.id)
        return fresh

    def watch(self, interval: float = POLL_INTERVAL) -> None:
        print("Watching for new messages, Ctrl+C to stop.")
        try:
            while True:
                self.refresh()
                time.sleep(interval)
        except KeyboardInterrupt:
            print()

    def show_admin(self) -> None:
        try:
            snapshot = self.api.get_admin_snapshot()
        except requests.HTTPError as exc:
            print(f"Admin view unavailable: {exc}")
            return
        print(json.dumps(snapshot, indent=2))

    def logout(self) -> None:
        self.api.logout()
        self.username = None
        self.seen_ids.clear()
        print("Logged out.")

    def session_loop(self) -> None:
        while self.username:
            print("\nCommands: [s]end, [r]efresh, [w]atch, [a]dmin, [o] logout")
            cmd = input("> ").strip().lower()
            try:
                if cmd == "s":
                    self.send(input("Message: "))
                elif cmd == "r":
                    if not self.refresh():
                        print("No new messages.")
                elif cmd == "w":
                    self.watch()
                elif cmd == "a":
                    self.show_admin()
                elif cmd == "o":
                    self.logout()
            except api.AuthenticationError:
                print("Session expired, please log in again.")
                self.username = None
            except requests.RequestException as exc:
                print(f"Request failed: {exc}")


def main():
    print("Felit Chat Client")
    default_url = os.getenv("FELIT_SERVER_URL", "http://127.0.0.1:3000")
    server_url = input(f"Server URL [{default_url}]: ").strip() or default_url
    client = ChatClient(server_url)

    while True:
        print("\nMenu: [l]ogin, [q]uit")
        choice = input("> ").strip().lower()
        if choice == "q":
            sys.exit(0)
        if choice == "l" and client.login():
            client.session_loop()


if __name__ == "__main__":
    main()
