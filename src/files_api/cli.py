# cli.py
import logging

import click

from files_api.settings import load_settings


@click.group()
def cli():
    """CLI commands for the Files API"""
    pass


@cli.command()
def show_config():
    """Show current configuration (secrets masked)"""
    settings = load_settings()

    click.echo("Current Configuration:")
    click.echo(f"  AWS Region: {settings.aws_region}")
    click.echo(f"  AWS Endpoint: {settings.aws_endpoint_url}")
    click.echo(f"  AWS Access Key ID: {settings.aws_access_key_id[:4]}****")
    click.echo(f"  S3 Bucket: {settings.s3_bucket_name}")
    click.echo(f"  Log Level: {settings.log_level}")


@cli.command()
@click.option("--host", default="0.0.0.0", show_default=True, help="Interface to bind")
@click.option("--port", default=8000, show_default=True, type=int, help="Port to listen on")
def serve(host, port):
    """Run the Files API with uvicorn"""
    import uvicorn

    from files_api.main import create_app

    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    uvicorn.run(create_app(settings), host=host, port=port)


if __name__ == "__main__":
    cli()
