# syslab

A small collection of systems-programming tools for POSIX machines:

- **`syslab.shell`**: `tsh`, a tiny interactive shell with job control
  (foreground and background jobs, `jobs`, `bg`, `fg`, `quit`, and
  forwarding of ctrl-c and ctrl-z to the foreground job). The `Shell`
  class can also be driven directly: `Shell.eval(line)` runs one command
  line and `Shell.run(stream)` reads lines until end of input or `quit`.
- **`syslab.jobs`**: the shell's job table (`JobList`, `Job`, `JobState`)
  and its command-line splitter `parseline`. The table holds at most 16
  jobs.
- **`syslab.memlist`**: `BlockList`, a list of memory blocks (`Block`)
  kept sorted by address, with per-block allocation counts
  (`alloc`, `dealloc`, `find`, `dump`).
- **`syslab.memlog`**: `MemLog`, which writes numbered log lines
  (`[0001] ...`) describing `malloc`, `calloc`, `realloc` and `free`
  calls, statistics, non-freed blocks and double or illegal frees, and
  `format_pointer`, which renders an address as `0x...` or `(nil)`.
- **`syslab.rio`**: robust I/O on file descriptors: `readn`, `writen`,
  and the buffered `RioReader` with `read` and `readline`.
- **`syslab.counter`**: two threads incrementing a shared counter, with
  or without a semaphore, to show what a race does to the result
  (`run_counter`, `CountResult`).
- **`syslab.testprogs`**: helper programs for exercising the shell.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## The shell

```
tsh          # interactive, with the "tsh> " prompt
tsh -p       # no prompt, handy for scripted input
tsh -v       # print extra diagnostics
tsh -h       # show usage
```

Programs are run by path, for example `/bin/ls -l`; a name without a
path separator is looked up in the current directory. A trailing `&`
runs the job in the background. Text enclosed in single quotes is one
argument. Built-in commands:

| Command | Effect |
|---------|--------|
| `jobs` | list current jobs |
| `bg <job>` | resume a job in the background |
| `fg <job>` | resume a job in the foreground and wait for it |
| `quit` | leave the shell |

A job is named either by process ID (`1234`) or by job ID (`%1`).
Each job runs in its own process group; ctrl-c and ctrl-z are passed on
to the foreground job's group.

## Helper programs

These are useful as commands to run inside `tsh`:

```
myspin 3     # sleep for 3 seconds in one-second steps
myint 2      # sleep 2 seconds, then interrupt itself
mystop 2     # sleep 2 seconds, then stop its process group
mysplit 4    # start a child that sleeps 4 seconds and wait for it
```

## Counter demo

```
syslab-counter 1000000           # two threads, no locking
syslab-counter --mutex 1000000   # each increment guarded by a semaphore
```

It prints `OK cnt=...` when both threads' increments all landed and
`BOOM! cnt=...` when some were lost, followed by the elapsed time in
microseconds.

## Robust I/O

```python
import os
from syslab.rio import RioReader, writen

r, w = os.pipe()
writen(w, b"first\nsecond\n")
os.close(w)
reader = RioReader(r)
reader.readline()   # b"first\n"
reader.read(100)    # b"second\n"
```

`readline(maxlen)` returns at most `maxlen - 1` bytes and an empty
result at end of file.

## What it does not do

- There is no allocation tracer here. `BlockList` and `MemLog` are the
  building blocks for one, but nothing in the package intercepts
  allocation calls or produces a trace on its own; the caller records
  allocations and writes the log.
- There are no networking helpers: the package does not open TCP client
  or listening sockets.