#!/usr/bin/env python3
"""
Simple local API status monitoring example
"""

import sys
import logging

from spotilocal import config, connect, ConnectError


def on_status(client, snapshot, changes):
    """Print what changed; keep polling while the player is running."""
    if changes.track:
        track = snapshot.simple_track()
        if track:
            print("\n🎵 NEW TRACK:")
            print(f"   Title: {track.name}")
            print(f"   Artist: {track.artist}")
            print(f"   Album: {track.album}")
            print(f"   Length: {snapshot.track.get_length_formatted()}")
        else:
            print("\n🔇 NO TRACK PLAYING")

    if changes.playing:
        print(f"\n⏯️ STATE CHANGE: {'Playing' if snapshot.playing else 'Paused'}")

    if changes.volume:
        print(f"\n🔊 VOLUME CHANGE: {snapshot.volume_percentage}%")

    if changes.online:
        print(f"\n🌐 {'ONLINE' if snapshot.online else 'OFFLINE'}")

    return snapshot.running


def main():
    print("🎵 spotilocal Status Monitor Example")
    print("=" * 45)

    print("🔌 Connecting to local API...")
    try:
        client = connect()
    except ConnectError as e:
        print(f"❌ {e}")
        print("💡 Make sure the desktop player and its helper are running")
        return 1

    print(f"✅ Connected to {client.base_url}!")
    print("\n📡 Starting monitor... (Press Ctrl+C to stop)")
    print("-" * 45)

    handle = client.poll(on_status)
    try:
        outcome = handle.join()
    except KeyboardInterrupt:
        print("\n\n👋 Stopping monitor...")
        outcome = handle.stop()
    finally:
        client.disconnect()

    if outcome is not None and not outcome.ok:
        print(f"❌ Polling ended ({outcome.reason.value}): {outcome.error}")
        return 1
    return 0


if __name__ == "__main__":
    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    exit_code = main()
    sys.exit(exit_code)
