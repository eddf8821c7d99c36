# cogent

Building blocks for the terminal front end of a coding agent: sessions saved
as JSON, inline user prompts, shell-like input history, a task browser backed
by Linear, ANSI-aware text helpers and an animated splash screen.

The only third-party dependency is `wcwidth`, used to measure how many
terminal cells a character takes.

## Sessions on disk

`cogent.sessiondata.SessionData` holds what is saved for a session: its id and
name, model, runtime id, tab position, conversation messages (kept as plain
JSON values), permission mode, allowed tools, structured output lines
(`SessionLine`), cost, context usage and timestamps. `to_json()` and
`from_json()` convert it; empty optional fields are left out of the JSON and
timestamps are written in RFC 3339 form.

`cogent.sessionstore.LocalSessionStore` keeps sessions as
`<cwd>/.cogent/sessions/<id>.json`. `list()` returns them most recently
updated first, skips files it cannot read, and returns an empty list when the
directory does not exist. `load()` and `delete()` raise `FileNotFoundError`
for an unknown id.

```python
from cogent.sessiondata import SessionData, generate_persist_id
from cogent.sessionstore import LocalSessionStore

store = LocalSessionStore(".")
data = SessionData(id=generate_persist_id(), name="Refactor parser", tab_order=1)
store.save(data)

for saved in store.list():
    print(saved.id, saved.name)

store.delete(data.id)
```

A `tab_order` of 0 marks a closed session; 1 and above give its tab position.
`generate_persist_id()` returns 8 random hex characters, and
`sorted_true_keys(mapping)` returns the sorted keys whose value is true, the
form in which allowed tools are stored.

## Runtimes

`cogent.runtime.InProcessRuntime` describes a runtime that runs in the current
process: `kind()` is `RuntimeKind.LOCAL`, `runtime_id()` is empty, `status()`
is `RuntimeStatus.READY`, `wake()` and `sleep()` just return that status, and
`sync_to()` / `sync_from()` do nothing.

## Prompts

`cogent.prompt.Prompt` covers the three kinds of question shown inline: tool
confirmations (`Prompt.confirm`, y/n/a), plan confirmation
(`Prompt.plan_confirm`, y/n) and multiple choice (`Prompt.choice`), where the
last choice is the freeform "Other" option.

```python
from cogent.prompt import Prompt

prompt = Prompt.choice("Which approach?", ["Interfaces", "Generics", "Other (I'll explain)"])
prompt.down()
prompt.select_by_number(3)
print(prompt.is_other_selected())   # True
print(prompt.hint_text())           # " ↑/↓ enter  (1-3) "
print(prompt.render_prompt_line())  # styled question and numbered choices
```

Navigation and number selection are ignored on non-choice prompts and while
`freeform` is set.

## Input helpers

`cogent.history` provides:

- `InputHistory`: `push()` records a submitted input (skipping empty text and
  consecutive repeats); `up(current)` and `down()` browse it and return the
  text to show, or `None` when nothing changes; moving past the newest entry
  restores the text that was being typed. `rebuild(entries)` refills it from
  earlier prompts.
- `auto_name(prompt, current, name_set)`: a tab name from the first line of a
  prompt, cut to 24 bytes with an ellipsis, unless the name was set by hand.
- `input_visual_lines(value, width)`: how many rows the input needs in a text
  area of the given width.
- `run_shell_command(command, cwd)`: runs the command with `sh -c`, without
  `ANTHROPIC_API_KEY` in its environment, and returns a `ShellResult` with the
  output lines, exit code and an `(exit code N)` message on failure.

## Tasks

`cogent.tasks.TaskModal` renders a boxed list of issues or groups from any
`TaskProvider`, with tabs, drilling into groups, a detail view and
`format_task_for_prompt()` to turn an item into prompt text. Provider errors
raised during `fetch()` are shown inside the modal.

`cogent.linear.LinearProvider` talks to Linear's GraphQL API. Its tabs are
"My Issues" (issues assigned to the user named by `username`, or to the owner
of the API key) and "Projects". Without arguments it reads `LINEAR_API_KEY`
and `LINEAR_USERNAME` from the environment; `detect_task_provider()` returns
such a provider.

```python
from cogent.linear import detect_task_provider
from cogent.tasks import TaskModal, format_task_for_prompt

modal = TaskModal(detect_task_provider(), 100, 30)
modal.fetch()
print(modal.render())

if modal.enter() is False and modal.show_detail:
    print(format_task_for_prompt(modal.selected_item()))
```

## Text helpers

`cogent.textutil` has `Style` (256-colour foreground and background, bold,
italic), and `strip_ansi`, `visible_width`, `truncate`, `wrap` and
`wrap_line`, all of which respect ANSI escape sequences and wide characters.
`wrap_line` truncates, instead of wrapping, any sub-line that starts with
`NO_WRAP_MARKER`, so table rows stay on one line.

## Splash screen

`cogent.splash.Splash` draws the word COGENT in block letters decorated with
random combining marks over pulsing background noise. `view(now)` renders a
frame for the screen size it was given, and `tick(now)` returns True once
1.75 seconds have passed. `block_text`, `zalgo_string` and `zalgo_char` are
available on their own.

## What this package does not do

It contains no agent and no model client: nothing here sends prompts to a
model or runs tools. It also has no interactive terminal application and no
command to start one; the prompts, task modal and splash screen return
strings for a caller to draw and react to keys for. Markdown and structured
output lines are stored but not rendered, and there are no remote runtimes,
only `InProcessRuntime`.