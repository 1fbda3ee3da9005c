"""CLI Commands"""

import os

from opencommit.config import load_config, get_config_path, resolve_provider_and_model
from opencommit.output import bold, dim, info


def display_config() -> int:
    """Display current configuration."""
    config = load_config()
    config_path = get_config_path()
    provider, model = resolve_provider_and_model(config)

    print(f"\n{bold('Current Configuration')}\n")

    if config_path:
        print(f"  {dim('Loaded from:')} {config_path}")
    else:
        print(f"  {dim('Loaded from:')} defaults (no .ocrc found)")

    env_provider = os.environ.get('OC_PROVIDER')
    env_model = os.environ.get('OC_MODEL')
    if env_provider or env_model:
        print(f"  {dim('Environment overrides:')}")
        if env_provider:
            print(f"    OC_PROVIDER={env_provider}")
        if env_model:
            print(f"    OC_MODEL={env_model}")

    print()
    print(f"  {bold('Settings:')}")
    print(f"    provider:           {info(provider)}")
    print(f"    model:              {info(model or 'auto')}")
    print(f"    include_body:       {info(str(config.include_body).lower())}")
    print(f"    max_subject_length: {info(str(config.max_subject_length))}")
    print(f"    max_tokens:         {info(str(config.max_tokens))}")

    print(f"\n  {dim('Config locations:')}")
    print(f"    Local:  .ocrc (in current directory)")
    print(f"    Global: ~/.ocrc\n")

    return 0
