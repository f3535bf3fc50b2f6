# docmirror/cli/commands/__init__.py
