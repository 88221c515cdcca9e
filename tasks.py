import sys
from invoke import task
from pathlib import Path

# Get project root directory
PROJECT_ROOT = Path(__file__).parent.absolute()

TEST_SETTINGS = "pgntour.test_settings"


def project_relative(path):
    """Convert a relative path to an absolute path relative to the project root."""
    return str(PROJECT_ROOT / path)


def import_db_settings():
    """Import the default database settings from Django settings."""
    sys.path.insert(0, str(PROJECT_ROOT))
    from pgntour.settings import DATABASES
    return DATABASES['default']


@task
def install(c):
    """Install the project in editable mode."""
    c.run(f"pip install -e {PROJECT_ROOT}")


@task
def createdb(c):
    """Create a new PostgreSQL database for the project."""
    db = import_db_settings()
    if 'postgresql' not in db['ENGINE']:
        print(f"Database engine is {db['ENGINE']}; nothing to create")
        return
    c.run(f"createdb -U {db['USER']} {db['NAME']}", warn=True)


@task
def migrate(c):
    """Run Django database migrations."""
    manage_py = project_relative("manage.py")
    c.run(f"python {manage_py} migrate")


@task
def makemigrations(c):
    """Create new Django migrations."""
    manage_py = project_relative("manage.py")
    c.run(f"python {manage_py} makemigrations tournament")


@task
def shell(c):
    """Start Django shell."""
    manage_py = project_relative("manage.py")
    c.run(f"python {manage_py} shell")


@task
def test(c, path=None):
    """Run Django tests. Optionally specify a specific test path."""
    manage_py = project_relative("manage.py")
    target = path or "pgntour"
    c.run(f"python {manage_py} test {target} --settings={TEST_SETTINGS}")


@task
def testcore(c):
    """Run the database-free tournament_core tests with plain unittest."""
    c.run(f"python -m unittest discover -s {project_relative('pgntour/tournament_core/tests')} "
          f"-t {PROJECT_ROOT}")


@task(help={'pgn_file': "Path to the PGN file",
            'dry_run': "Validate only, store nothing",
            'analyze': "Send games to the engine analysis service"})
def importpgn(c, pgn_file, dry_run=False, analyze=False):
    """Import a tournament from a PGN file."""
    manage_py = project_relative("manage.py")
    flags = ""
    if dry_run:
        flags += " --dry-run"
    if analyze:
        flags += " --analyze"
    c.run(f"python {manage_py} import_pgn {pgn_file}{flags}")


@task(help={'players': "Number of players", 'double': "Double round robin"})
def seed(c, players=6, double=False, seed=None):
    """Seed a random round-robin tournament."""
    manage_py = project_relative("manage.py")
    flags = f" --players {players}"
    if double:
        flags += " --double"
    if seed is not None:
        flags += f" --seed {seed}"
    c.run(f"python {manage_py} seed_pgn_tournament{flags}")
