import json
import os
from datetime import datetime

from simulator.parser import SYMBOL_TYPES

DEFAULT_CONFIG = {
    "max_steps": 1_000_000,
    "symbol_type": "bool",
    "window_radius": 10,
    "log_frequency": 10_000,
    "trim_blanks": True,
    "output_directory": "logs/",
    "log_file_prefix": "turing_",
    "programs_directory": "programs/"
}

# Expected types for validation
CONFIG_SCHEMA = {
    "max_steps": int,
    "symbol_type": str,
    "window_radius": int,
    "log_frequency": int,
    "trim_blanks": bool,
    "output_directory": str,
    "log_file_prefix": str,
    "programs_directory": str
}

def validate_config(config):
    for key, expected_type in CONFIG_SCHEMA.items():
        if key not in config:
            raise ValueError(f"Missing required configuration key: {key}")
        # bool is an int subclass, so True must not pass as a step count
        if not isinstance(config[key], expected_type) or (expected_type is int and isinstance(config[key], bool)):
            raise TypeError(f"Config key '{key}' expected {expected_type}, got {type(config[key])}.")

    if config["symbol_type"] not in SYMBOL_TYPES:
        raise ValueError(f"Unknown symbol_type '{config['symbol_type']}', expected one of {sorted(SYMBOL_TYPES)}.")
    if config["window_radius"] < 0:
        raise ValueError("window_radius must not be negative.")
    if config["max_steps"] <= 0 or config["log_frequency"] <= 0:
        raise ValueError("max_steps and log_frequency must be positive.")

def load_config(path="config/runtime_config.json", verbose=True):
    if not os.path.exists(path):
        raise FileNotFoundError(f"Configuration file not found at: {path}")

    with open(path, "r", encoding="utf-8") as f:
        user_config = json.load(f)

    # Merge defaults with overrides
    config = DEFAULT_CONFIG.copy()
    config.update(user_config)

    # Validate schema
    validate_config(config)

    # Validate output directory
    os.makedirs(config["output_directory"], exist_ok=True)

    if verbose:
        print(f"[{datetime.now()}] Loaded config:")
        for key, value in config.items():
            print(f"  {key}: {value}")

    return config

def save_config(config, path="config/runtime_config.json"):
    validate_config(config)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config, f, indent=4)
