#!/usr/bin/env python3
"""
Server Monitor - Polls servers and logs players joining and leaving
"""

import argparse
import datetime
import logging
import time

from pyutquery import QueryConfig, query_servers

# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


class ServerMonitor:
    def __init__(self, addresses, config=None):
        self.addresses = list(addresses)
        self.config = config or QueryConfig()
        self.start_time = datetime.datetime.now()

        # Statistics per address
        self.online = {address: set() for address in self.addresses}
        self.peak_players = {address: 0 for address in self.addresses}
        self.failures = {address: 0 for address in self.addresses}

    def poll(self):
        """Query every server once and report roster changes"""
        for address, response in query_servers(self.addresses, self.config).items():
            if not response.success:
                self.failures[address] += 1
                logging.warning(f"{address}: {response.error}")
                continue

            names = {player.name for player in response.server.player_list}
            for name in sorted(names - self.online[address]):
                logging.info(f"{address}: {name} joined {response.server.map}")
            for name in sorted(self.online[address] - names):
                logging.info(f"{address}: {name} left")

            self.online[address] = names
            self.peak_players[address] = max(self.peak_players[address], len(names))

    def print_summary(self):
        uptime = datetime.datetime.now() - self.start_time
        print(f"\nMonitoring for {uptime}")
        for address in self.addresses:
            print(f"  {address}: {len(self.online[address])} online, "
                  f"peak {self.peak_players[address]}, {self.failures[address]} failed polls")


def main():
    parser = argparse.ArgumentParser(description="Monitor UT2004 servers")
    parser.add_argument("addresses", nargs="+", help="Server query addresses (host:port)")
    parser.add_argument("--interval", type=float, default=30.0, help="Seconds between polls")
    args = parser.parse_args()

    monitor = ServerMonitor(args.addresses)

    try:
        while True:
            monitor.poll()
            time.sleep(args.interval)
    except KeyboardInterrupt:
        logging.info("Shutting down...")
    finally:
        monitor.print_summary()


if __name__ == "__main__":
    main()
