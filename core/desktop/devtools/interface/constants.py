"""Interface-level constants for the taskg TUI and CLI."""

APP_NAME = "taskg"
APP_VERSION = "0.3.0"

LOGO_LINES = ("░▀░▀░  ", "░▄░▄░  ")

EXAMPLE_TASKFILE = """version: '3'
tasks:
  hello:
    desc: Say hello
    cmds:
      - echo 'Hello from Task'"""

LANG_PACK = {
    "en": {
        "APP_TITLE": "Task Runner Gui - taskg",
        "NO_PROJECT": "(no Taskfile)",
        "ERR_NO_TASKFILE": "No Taskfile found in this or parent directories. Use --project to point at one.",
        "ERR_TOOL_MISSING": "The '{binary}' executable was not found on PATH.",
        "ERR_DISCOVERY_FAILED": "Failed to enumerate tasks: {error}",
        "ERR_NO_TASKS": "No tasks discovered in Taskfile.",
        "EMPTY_NO_TASKS": "No tasks found",
        "EMPTY_NO_MATCHES": "No tasks match '{query}'",
        "GUIDE_CREATE_TASKFILE": "Create a Taskfile.yml, e.g:",
        "GUIDE_INSTALL_TASK": "Install go-task from https://taskfile.dev/installation/ or pass --task-bin.",
        "GUIDE_CLEAR_SEARCH": "Press esc to clear the search.",
        "SEARCH_PROMPT": "🔍 ",
        "SEARCH_RETAINED": "🔍 {query}  ( / edit  esc clear )",
        "STATUS_REFRESHING": "Refreshing tasks...",
        "STATUS_REFRESHED": "Refreshed: {count} tasks",
        "STATUS_REFRESH_BUSY": "Refresh already in progress",
        "STATUS_REFRESH_FAILED": "Refresh failed: {error}",
        "STATUS_SORTED": "Sorted by {mode}",
        "SORT_ALPHA": "name (A→Z)",
        "SORT_FILE": "file order",
        "FOOTER_MOVE": "↑↓ move",
        "FOOTER_TABS": "←→/Tab switch",
        "FOOTER_RUN": "Enter run",
        "FOOTER_SEARCH": "/ search",
        "FOOTER_REFRESH": "r/^R refresh",
        "FOOTER_SORT_ALPHA": "Sort: A→Z (^S)",
        "FOOTER_SORT_FILE": "Sort: Original (^S)",
        "FOOTER_QUIT": "q quit",
        "TASK_EXITED": "Task exited with status {code}",
        "TASK_LAUNCH_FAILED": "Could not launch task: {error}",
        "CLI_DESCRIPTION": "Interactive browser for Taskfile tasks.",
        "CLI_THEME_HELP": "Color theme",
        "CLI_NO_MOUSE_HELP": "Disable mouse support",
        "CLI_PROJECT_HELP": "Directory to start the Taskfile search from",
        "CLI_TASK_BIN_HELP": "Name or path of the task executable",
        "CLI_LOG_FILE_HELP": "Write debug log to this file",
        "CLI_TASK_ARGS_HELP": "Extra arguments forwarded to the chosen task",
    },
    "ru": {
        "NO_PROJECT": "(нет Taskfile)",
        "ERR_NO_TASKFILE": "Taskfile не найден ни в этом, ни в родительских каталогах. Укажите --project.",
        "ERR_TOOL_MISSING": "Исполняемый файл '{binary}' не найден в PATH.",
        "ERR_DISCOVERY_FAILED": "Не удалось получить список задач: {error}",
        "ERR_NO_TASKS": "В Taskfile нет задач.",
        "EMPTY_NO_TASKS": "Задачи не найдены",
        "EMPTY_NO_MATCHES": "Нет задач по запросу '{query}'",
        "GUIDE_CREATE_TASKFILE": "Создайте Taskfile.yml, например:",
        "GUIDE_INSTALL_TASK": "Установите go-task: https://taskfile.dev/installation/ или укажите --task-bin.",
        "GUIDE_CLEAR_SEARCH": "Нажмите esc, чтобы сбросить поиск.",
        "SEARCH_RETAINED": "🔍 {query}  ( / изменить  esc сбросить )",
        "STATUS_REFRESHING": "Обновление задач...",
        "STATUS_REFRESHED": "Обновлено: задач {count}",
        "STATUS_REFRESH_BUSY": "Обновление уже идёт",
        "STATUS_REFRESH_FAILED": "Ошибка обновления: {error}",
        "STATUS_SORTED": "Сортировка: {mode}",
        "SORT_ALPHA": "по имени (А→Я)",
        "SORT_FILE": "как в файле",
        "FOOTER_MOVE": "↑↓ выбор",
        "FOOTER_TABS": "←→/Tab вкладки",
        "FOOTER_RUN": "Enter запуск",
        "FOOTER_SEARCH": "/ поиск",
        "FOOTER_REFRESH": "r/^R обновить",
        "FOOTER_SORT_ALPHA": "Сорт.: А→Я (^S)",
        "FOOTER_SORT_FILE": "Сорт.: файл (^S)",
        "FOOTER_QUIT": "q выход",
        "TASK_EXITED": "Задача завершилась с кодом {code}",
        "TASK_LAUNCH_FAILED": "Не удалось запустить задачу: {error}",
    },
}
