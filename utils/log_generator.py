# utils/log_generator.py
# This file is part of Causeway - Causal Log Motif Search
#
# Synthetic vector-clock log generation for tests and demos

import json
import random
from typing import Dict, List, Optional, Tuple

DEFAULT_LINE_FORMAT = "{host} {event} {clock}"


def generate_log(
    num_events: int,
    hosts: List[str],
    send_probability: float = 0.3,
    seed: Optional[int] = None,
    keywords: Optional[Dict[int, str]] = None,
) -> str:
    """
    Generates a log of events with correctly maintained vector clocks.

    Every step a random host either delivers a pending message addressed to
    it (merging the sender's clock) or performs a local step; local steps
    send a message to another random host with `send_probability`.

    Args:
        num_events: Total number of log lines to generate.
        hosts: Host names (e.g. ["A", "B", "C"]).
        send_probability: Chance that a local step also sends a message.
        seed: Seed for the random generator, for reproducible logs.
        keywords: Maps 1-based event indices to a word placed in that line's
                  event text (e.g. {3: "ERROR"}).

    Returns:
        The log text, one ``host event {clock}`` line per event.
    """
    if not hosts:
        raise ValueError("hosts list cannot be empty.")

    rng = random.Random(seed)
    keywords = keywords or {}
    clocks: Dict[str, Dict[str, int]] = {h: {} for h in hosts}
    # Messages in flight: (destination, sender clock snapshot)
    in_flight: List[Tuple[str, Dict[str, int]]] = []
    lines: List[str] = []

    for i in range(1, num_events + 1):
        host = rng.choice(hosts)
        clock = clocks[host]
        clock[host] = clock.get(host, 0) + 1

        inbox = [m for m in in_flight if m[0] == host]
        if inbox and rng.random() < 0.5:
            message = inbox[0]
            in_flight.remove(message)
            for other, value in message[1].items():
                clock[other] = max(clock.get(other, 0), value)
            action = "recv"
        elif len(hosts) > 1 and rng.random() < send_probability:
            destination = rng.choice([h for h in hosts if h != host])
            in_flight.append((destination, dict(clock)))
            action = f"send_{destination}"
        else:
            action = "local"

        event = f"{action}_{keywords[i]}" if i in keywords else action
        lines.append(
            DEFAULT_LINE_FORMAT.format(
                host=host, event=event, clock=json.dumps(clock, separators=(",", ":"))
            )
        )

    return "\n".join(lines) + "\n"
