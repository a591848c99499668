"""Built-in CLI sub-commands for natayark.

* :mod:`~natayark.commands.session` -- ``login``, ``status`` and ``logout``,
  registered directly on the root app.
* :mod:`~natayark.commands.config` -- the ``config`` group for viewing and
  editing endpoint and transport settings.
"""
