from typing import Optional
import requests
import typer
from dotenv import load_dotenv
from rich.console import Console

from jira_version.clients.jira import JiraClient
from jira_version.core.actions import ActionsReporter
from jira_version.core.config import ActionInputs, InputError, InputResolver
from jira_version.core.workflow import (
    ResponseParseError,
    RetryPolicy,
    VersionCreationError,
    run_version_workflow,
)

app = typer.Typer(
    help="Create (or look up) a Jira project version",
    no_args_is_help=False,
    add_completion=False,
    rich_markup_mode=None,
)
console = Console(soft_wrap=True, highlight=False, emoji=False)


@app.callback(invoke_without_command=True)
def root(ctx: typer.Context):
    if ctx.invoked_subcommand is None:
        typer.echo("Specify a subcommand, e.g.: jira-version create")
        raise typer.Exit(2)


def run_action(
    resolver: InputResolver,
    reporter: ActionsReporter,
    session: Optional[requests.Session] = None,
    policy: Optional[RetryPolicy] = None,
) -> int:
    """Whole run; every failure ends up in reporter.set_failed, never as an exception."""
    try:
        inputs = ActionInputs.resolve(resolver)

        reporter.set_secret(inputs.api_token)
        reporter.set_secret(inputs.user_email)
        reporter.debug("Secrets masked in logs")

        reporter.debug(f"Initializing HTTP client for {inputs.base_url}")
        client = JiraClient(
            base_url=inputs.base_url,
            email=inputs.user_email,
            api_token=inputs.api_token,
            session=session,
        )

        result = run_version_workflow(
            client,
            inputs.to_request(),
            check_if_exists=inputs.check_if_exists,
            reporter=reporter,
            policy=policy,
        )
        reporter.set_output("version-id", result.record.id)
        reporter.set_output("version-url", result.record.self_url)
    except (InputError, VersionCreationError, ResponseParseError) as e:
        reporter.set_failed(str(e))
    except Exception as e:
        # transport faults (requests.RequestException) included
        reporter.set_failed(f"Action failed with error: {e}")
    return reporter.exit_code


@app.command()
def create(
    jira_base_url: Optional[str] = typer.Option(None, "--jira-base-url", help="Jira site, e.g. https://acme.atlassian.net"),
    jira_project_key: Optional[str] = typer.Option(None, "--jira-project-key", help="Project key"),
    jira_user_email: Optional[str] = typer.Option(None, "--jira-user-email", help="Account email (prefer the env var)"),
    jira_api_token: Optional[str] = typer.Option(None, "--jira-api-token", help="API token (prefer the env var)"),
    version_name: Optional[str] = typer.Option(None, "--version-name", help="Version name"),
    version_description: Optional[str] = typer.Option(None, "--version-description", help="Version description"),
    released: Optional[str] = typer.Option(None, "--released", help="true/false"),
    check_if_exists: Optional[str] = typer.Option(None, "--check-if-exists", help="true/false, reuse a version with the same name"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="YAML file with an `inputs:` section"),
):
    load_dotenv()

    cli_values = {
        "jira-base-url": jira_base_url,
        "jira-project-key": jira_project_key,
        "jira-user-email": jira_user_email,
        "jira-api-token": jira_api_token,
        "version-name": version_name,
        "version-description": version_description,
        "released": released,
        "check-if-exists": check_if_exists,
    }
    reporter = ActionsReporter(console=console)
    try:
        resolver = InputResolver(cli_values=cli_values, config_path=config)
    except InputError as e:
        reporter.set_failed(str(e))
        raise typer.Exit(reporter.exit_code)
    except Exception as e:
        reporter.set_failed(f"Action failed with error: {e}")
        raise typer.Exit(reporter.exit_code)

    code = run_action(resolver, reporter)
    if code:
        raise typer.Exit(code)


if __name__ == "__main__":
    app()
