"""CLI Commands"""

import os
import sys

from aicommit.config import API_KEY_ENV_VARS, Config, resolve_api_key
from aicommit.llm import resolve_provider, UnsupportedProviderError
from aicommit.output import bold, dim, info, warning


def display_config(config: Config, config_path=None) -> int:
    """Display current configuration. Keys are only reported as set/unset."""
    print(f"\n{bold('Current Configuration')}\n")

    if config_path:
        print(f"  {dim('Loaded from:')} {config_path}")
    else:
        print(f"  {dim('Loaded from:')} defaults (no .aicommitrc found)")

    print()
    print(f"  {bold('Settings:')}")
    print(f"    provider:        {info(config.provider)}")
    print(f"    model:           {info(config.model or 'provider default')}")
    print(f"    max_diff_length: {info(str(config.max_diff_length))}")
    print(f"    timeout:         {info(str(config.timeout))}s")

    try:
        provider = resolve_provider(config.provider, config.model).value
    except UnsupportedProviderError:
        provider = None

    if provider:
        print(f"    resolved:        {info(provider)} / {info(config.model_for(provider) or '')}")
        key_state = info('set') if resolve_api_key(provider, config) else warning('not set')
        print(f"    api key:         {key_state} {dim('(' + ', '.join(API_KEY_ENV_VARS[provider]) + ')')}")

    print(f"\n  {dim('Config locations:')}")
    print(f"    Local:  .aicommitrc (in current directory)")
    print(f"    Global: ~/.aicommitrc\n")

    return 0


def run_install_completion() -> int:
    """Install shell tab completion."""
    shell = os.environ.get('SHELL', '')

    print(f"\n{bold('Tab Completion Setup')}\n")

    line = 'eval "$(register-python-argcomplete aicommit)"'
    if 'zsh' in shell or 'bash' in shell:
        rc_file = os.path.expanduser('~/.zshrc' if 'zsh' in shell else '~/.bashrc')
        print(f"Add this line to {dim(rc_file)}:\n")
        print(f"  {line}\n")
        print(f"Then run: {dim('source ' + rc_file)}")
    elif sys.platform == 'win32':
        print("For PowerShell, run:\n")
        print("  register-python-argcomplete --shell powershell aicommit | Out-String | Invoke-Expression\n")
        print("To make it permanent, add it to your $PROFILE")
    else:
        print("Run one of these based on your shell:\n")
        print(f"  {dim('# Bash/Zsh')}")
        print(f"  {line}\n")
        print(f"  {dim('# Fish')}")
        print("  register-python-argcomplete --shell fish aicommit | source")

    print(f"\n{dim('After setup, press TAB to autocomplete flags.')}")
    return 0
