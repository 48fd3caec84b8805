# bloodbank/audit.py
import logging

audit_logger = logging.getLogger("bloodbank.audit")


def log_event(action, user=None, **details):
    """
    Record a console event.
    user – username the event is attributed to (default: anon).
    details – extra key/value pairs appended to the line.
    Never pass passwords here.
    """
    who = user or "anon"
    message = f"{who} -> {action}"
    if details:
        message += " " + " ".join(f"{key}={value}" for key, value in sorted(details.items()))
    audit_logger.info(message)
