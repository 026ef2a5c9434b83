#!/usr/bin/env python3
"""Utility script to check hosts against the blocked domain patterns in config.yaml."""
import os
import sys
from cspguard.config.loader import Config
from cspguard.policy.domains import is_blocked

if len(sys.argv) < 2:
    print("Usage: python check_blocked_host.py <host> [<host> ...]")
    sys.exit(1)

config = Config(os.getenv('CSPGUARD_CONFIG', 'config.yaml'))
patterns = config.blocked_domain_patterns()
if not patterns:
    print("Third-party domain blocking is disabled or has no patterns")

for host in sys.argv[1:]:
    print(f"{host}: {'blocked' if is_blocked(host, patterns) else 'allowed'}")
