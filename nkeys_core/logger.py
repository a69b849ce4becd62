import logging, json, re, sys, time, os

# Seeds ("S" + role letter) and private keys ("P") are recognizable from their
# leading character and base32 body; public identities are left readable.
_SECRET_RE = re.compile(r"\b(?:S[ACMNOUX][A-Z2-7]{56}|P[A-Z2-7]{55}(?:[A-Z2-7]{52})?)\b")
REDACTED = "<redacted>"


class SecretScrubber(logging.Filter):
    """Replace anything shaped like an encoded seed or private key before it is emitted."""

    def filter(self, record):
        msg = record.getMessage()
        scrubbed = _SECRET_RE.sub(REDACTED, msg)
        if scrubbed != msg:
            record.msg, record.args = scrubbed, None
        return True


def _formatter():
    formatter = logging.Formatter(
        fmt=json.dumps({
            "ts": "%(asctime)s",
            "level": "%(levelname)s",
            "name": "%(name)s",
            "msg": "%(message)s"
        }),
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )
    formatter.converter = time.gmtime  # UTC timestamps
    return formatter


def get_logger(name="nkeys", level=logging.INFO, to_file=None):
    """Structured JSON-line logger for nkey components; secrets never reach a handler."""
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if not any(isinstance(f, SecretScrubber) for f in logger.filters):
        logger.addFilter(SecretScrubber())

    if not logger.handlers:
        formatter = _formatter()
        handlers = [logging.StreamHandler(sys.stdout)]
        if to_file:
            os.makedirs(os.path.dirname(to_file) or ".", exist_ok=True)
            handlers.append(logging.FileHandler(to_file))
        for handler in handlers:
            handler.setFormatter(formatter)
            handler.addFilter(SecretScrubber())
            logger.addHandler(handler)

    return logger


def configure_logging(cfg):
    """Attach handlers to the package root logger using an NkeysConfig."""
    return get_logger("nkeys", level=cfg.log_level, to_file=cfg.log_file)
