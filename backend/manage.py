import asyncio

import typer

from newsfeed.config import settings
from newsfeed.backends import create_backends
from newsfeed.auth.schema import Credentials
from newsfeed.auth.service import register_user
from newsfeed.errors import ValidationError

cli = typer.Typer()


async def _with_storage(runner):
    """설정된 저장소를 열고 runner(storage)를 실행한 뒤 정리합니다."""
    storage, sessions = create_backends(settings)
    await storage.init()
    try:
        return await runner(storage)
    finally:
        await sessions.close()
        await storage.close()


@cli.command(name="init-db")
def init_db():
    """
    Creates all tables in the configured database.
    """
    if settings.storage_backend != "database":
        print("❌ DATABASE_URL is not set; nothing to initialize.")
        raise typer.Exit(code=1)

    async def runner(storage):
        return None

    asyncio.run(_with_storage(runner))
    print("✅ Database tables created.")


@cli.command(name="create-user")
def create_user(
    username: str = typer.Option(..., "--username", "-u", help="Login name."),
    password: str = typer.Option(..., "--password", "-p", help="Password."),
):
    """
    Creates a new user with the given credentials.
    """
    async def runner(storage):
        return await register_user(storage, Credentials(username=username, password=password))

    try:
        user = asyncio.run(_with_storage(runner))
    except ValidationError as e:
        print(f"❌ Error creating user: {e.message}")
        raise typer.Exit(code=1)

    print("✅ User created successfully!")
    print(f"   ID: {user.id}")
    print(f"   Username: {user.username}")


@cli.command(name="delete-user")
def delete_user(
    username: str = typer.Option(..., "--username", "-u", help="Login name of the user to delete."),
):
    """
    Deletes a user together with their interests and sessions.
    """
    async def runner(storage):
        user = await storage.get_user_by_username(username)
        if user is None:
            return False
        return await storage.delete_user(user.id)

    if not asyncio.run(_with_storage(runner)):
        print(f"❌ User not found: {username}")
        raise typer.Exit(code=1)
    print(f"✅ Deleted user '{username}'")


@cli.command()
def serve(reload: bool = typer.Option(False, "--reload", help="Auto-reload on code changes.")):
    """
    Runs the API server with uvicorn.
    """
    import uvicorn

    uvicorn.run("newsfeed.main:app", host=settings.APP_HOST, port=settings.APP_PORT, reload=reload)


if __name__ == "__main__":
    cli()
