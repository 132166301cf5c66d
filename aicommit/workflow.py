"""Commit Workflow - collect, generate, review, commit, then side actions."""

import logging
from dataclasses import dataclass
from typing import Callable

from aicommit.config import Config, API_KEY_ENV_VARS, resolve_api_key
from aicommit.git import (
    DiffBundle, DiffCollector, GitError, GitRepository, SideActionError,
    clasp_push, git_push, is_clasp_project, wrangler_deploy,
)
from aicommit.llm import LLMError, MissingAPIKeyError, get_client, resolve_provider
from aicommit.output import Spinner, dim, info, print_error, print_step, print_success, print_warning
from aicommit.cli.review import ReviewSession
from aicommit.cli.utils import confirm

logger = logging.getLogger(__name__)


@dataclass
class CommitOptions:
    """Per-run switches from the command line."""
    push: bool = False
    clasp: bool = False
    wrangler: bool = False
    export_path: str | None = None


@dataclass
class SideAction:
    label: str
    run: Callable[[GitRepository], None]


class CommitWorkflow:
    """Runs one commit from diff collection to post-commit actions."""

    def __init__(self, config: Config,
                 repo: GitRepository | None = None,
                 client_factory=get_client,
                 session: ReviewSession | None = None,
                 ask: Callable[[str], str] = input,
                 key_resolver=resolve_api_key):
        self.config = config
        self.repo = repo or GitRepository()
        self.client_factory = client_factory
        self.session = session or ReviewSession(ask=ask)
        self.ask = ask
        self.key_resolver = key_resolver

    def run(self, options: CommitOptions) -> int:
        """Returns the process exit code."""
        try:
            return self._run(options)
        except (GitError, LLMError) as e:
            print_error(str(e))
            if getattr(e, 'debug_path', None):
                print(dim(f"  Request payload saved to {e.debug_path}"))
            return 1

    def _run(self, options: CommitOptions) -> int:
        self.repo.verify()

        if options.clasp:
            if not is_clasp_project(self.repo.cwd):
                print_error("Not in a clasp repository (.clasp.json not found)")
                return 1
            if not confirm("Have you pulled from clasp?", default=False, ask=self.ask):
                print_warning("Please run 'clasp pull' first, then try again")
                return 0

        print_step("Analyzing changes")
        bundle = DiffCollector(self.repo, self.config.max_diff_length).collect()
        if bundle.is_empty:
            print_success("No changes to commit")
            return 0

        if options.export_path:
            return self.export(bundle, options.export_path)

        suggestion = self._generate(bundle)

        result = self.session.run(suggestion)
        if not result.accepted:
            print_warning("Commit cancelled")
            return 0

        print_step("Staging changes")
        self.repo.stage_all()
        print_step("Committing")
        self.repo.commit(result.message.format())

        print_success("Commit successful!")
        last_commit = self.repo.last_commit()
        if last_commit:
            print(info(f"Created: {last_commit}"))

        self.run_side_actions(options)
        return 0

    def _generate(self, bundle: DiffBundle):
        provider = resolve_provider(self.config.provider, self.config.model)
        api_key = self.key_resolver(provider.value, self.config)
        if not api_key:
            env_vars = " or ".join(API_KEY_ENV_VARS[provider.value])
            raise MissingAPIKeyError(f"API key not found for {provider.value}. Set {env_vars}")

        client = self.client_factory(
            provider, self.config.model_for(provider.value), api_key,
            timeout=self.config.timeout,
        )
        logger.debug("Diff: %d chars, %d files, truncated=%s",
                     len(bundle.text), bundle.total_files, bundle.truncated)

        print_step(f"Getting AI suggestion from {client.name}")
        with Spinner():
            return client.generate(bundle)

    def export(self, bundle: DiffBundle, path: str) -> int:
        try:
            with open(path, 'w', encoding='utf-8') as f:
                f.write(bundle.text)
        except OSError as e:
            print_error(f"Could not write diff to {path}: {e}")
            return 1
        print_success(f"Diff exported to {path} ({len(bundle.text)} chars)")
        return 0

    def side_actions(self, options: CommitOptions) -> list[SideAction]:
        actions = []
        if options.push:
            actions.append(SideAction("Push to remote", git_push))
        if options.clasp:
            actions.append(SideAction("Clasp push", clasp_push))
        if options.wrangler:
            actions.append(SideAction("Wrangler deploy", wrangler_deploy))
        return actions

    def run_side_actions(self, options: CommitOptions) -> dict[str, str | None]:
        """Run each action in order; failures are reported, never raised."""
        results = {}
        for action in self.side_actions(options):
            print_step(action.label)
            try:
                action.run(self.repo)
            except SideActionError as e:
                print_error(f"{action.label} failed: {e}")
                results[action.label] = str(e)
            else:
                print_success(f"{action.label} successful!")
                results[action.label] = None
        return results
