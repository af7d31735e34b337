"""
Line commands understood by the interactive console.

Each line is `<verb> [argument]`. Task numbers refer to the rows of the
currently filtered listing, starting at 1.
"""
from .state import TaskConsole

HELP_TEXT = """\
Commands:
  add                  start a new task (clears the form)
  edit <n>             load task <n> into the form
  title <text>         set the form title
  desc <text>          set the form description
  status <status>      pending | in-progress | completed
  save                 create or update from the form
  clear                reset the form
  delete <n>           delete task <n>
  filter <status>      all | pending | in-progress | completed
  search [text]        filter by text (empty clears)
  theme                toggle light/dark
  refresh              reload tasks from the API
  help                 show this help
  quit                 exit"""


class CommandError(Exception):
    pass


def _task_at(console: TaskConsole, argument: str) -> dict:
    visible = console.visible_tasks()
    try:
        index = int(argument)
    except ValueError:
        raise CommandError(f"Expected a task number, got '{argument}'")
    if not 1 <= index <= len(visible):
        raise CommandError(f"No task #{index} in the current listing")
    return visible[index - 1]


def execute(console: TaskConsole, line: str) -> bool:
    """
    Run one command line against the console.

    Returns False when the user asked to quit. Bad input raises CommandError
    with a message meant for the user.
    """
    verb, _, argument = line.strip().partition(" ")
    verb = verb.lower()
    argument = argument.strip()

    if verb in ("", "help", "?"):
        return True
    if verb in ("quit", "exit", "q"):
        return False

    if verb in ("add", "clear", "new"):
        console.reset_form()
    elif verb == "edit":
        console.start_edit(_task_at(console, argument))
    elif verb == "title":
        console.update_form(title=argument)
    elif verb in ("desc", "description"):
        console.update_form(description=argument)
    elif verb == "status":
        try:
            console.update_form(status=argument)
        except ValueError as e:
            raise CommandError(str(e))
    elif verb == "save":
        console.submit()
    elif verb == "delete":
        console.delete(_task_at(console, argument))
    elif verb == "filter":
        try:
            console.set_filter(argument or "all")
        except ValueError as e:
            raise CommandError(str(e))
    elif verb == "search":
        console.set_search(argument)
    elif verb == "theme":
        console.toggle_theme()
    elif verb == "refresh":
        console.load()
    else:
        raise CommandError(f"Unknown command '{verb}'. Type 'help' for the list.")
    return True
