"""
nameguess application package.

Layered the same way throughout:

  guessing/repositories/  — pure I/O: appending guesses to and reading them
                            back from a JSON file or a SQL database.
  guessing/services/      — business logic: cleaning submissions, grouping
                            guesses per guesser, and shaping output.

``GuessService`` (in ``guessing/services/guess_service.py``) is the
integration point: ``nameguess_web.py`` and the ``nameguess.py`` CLI build
one around whichever repository the configuration selects and never touch
the storage layer directly.
"""
