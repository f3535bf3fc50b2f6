# docmirror/__main__.py
from docmirror.cli import app

if __name__ == "__main__":
    app()
