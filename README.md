# procsys

Read, and where the kernel allows it, change Linux kernel settings and system
information exposed under `/proc`. It is a library only; there is no command
line tool.

## Modules

- `procsys.procfile`: the helpers every other module uses: `read_file(path)`,
  `read_value(path, parse)` and `write_value(path, value)`, plus the error
  classes.
- `procsys.uptime`: `Uptime` from `/proc/uptime`, with `uptime_duration()` and
  `idle_duration()` returning `datetime.timedelta` at centisecond precision.
- `procsys.shm`: System V shared memory segments from `/proc/sysvipc/shm`;
  `shm_segments()` reads the running system, `parse_shm(lines)` parses any
  iterable of lines (the first is taken as the header) into `Shm` records.
- `procsys.vm`: `/proc/sys/vm`: `admin_reserve_kbytes()`, `max_map_count()`,
  their setters, `compact_memory()` and `drop_caches(DropCache)`.
- `procsys.fs`: `/proc/sys/fs`: `dentry_state()` (`DEntryState`),
  `file_nr()` (`FileState`), `file_max()`, `max_user_watches()` and setters.
- `procsys.binfmt_misc`: `enabled()`, `entries()` (sorted by name) returning
  `BinFmtEntry` objects whose `data` is `ExtensionData` or `MagicData`, the
  `BinFmtFlags` flag set and `parse_hex(text)`.
- `procsys.keys`: key retention limits under `/proc/sys/kernel/keys`:
  `gc_delay()`, `persistent_keyring_expiry()`, `maxbytes()`, `maxkeys()`,
  `root_maxbytes()`, `root_maxkeys()` and setters for the last four.
- `procsys.random`: `entropy_avail()`, `poolsize()`, `read_wakeup_threshold()`
  (falling back to `write_wakeup_threshold` when the read file is absent),
  `write_wakeup_threshold(value)`, `uuid()` and `boot_id()`.
- `procsys.kernel`: `Version`, `KernelType`, `BuildInfo`, `SemaphoreLimits`,
  SysRq settings (`sysrq()`, `set_sysrq()`, `parse_sysrq()`,
  `sysrq_to_number()`, `SysRq`, `AllowedFunctions`), `pid_max()`,
  `shmall()`, `shmmax()`, `set_shmmax()`, `shmmni()`, `threads_max()` and
  `set_threads_max()`, which refuses values outside `THREADS_MIN` to
  `THREADS_MAX` on kernels reporting 4.1 or later.

## Usage

```python
from procsys.uptime import Uptime
from procsys.kernel import Version, BuildInfo, sysrq
from procsys.vm import DropCache, drop_caches
from procsys import fs

up = Uptime.current()
print(up.uptime_duration())

if Version.current() >= Version(4, 1, 0):
    print("modern kernel")

info = BuildInfo.current()
print(info.smp(), info.preempt(), info.extra)

print(fs.file_nr())
print(sysrq())

# Needs root privileges
drop_caches(DropCache.PAGE_CACHE)
```

The parsers also work on plain text, so data captured on another machine can
be inspected:

```python
from procsys.uptime import Uptime
from procsys.kernel import BuildInfo, Version

up = Uptime.parse("2578790.61 1999230.98\n")
print(up.idle_duration())

print(Version.parse("3.16.0-6-amd64"))          # Version(major=3, minor=16, patch=0)
print(BuildInfo.parse("#1 SMP Debian 5.10.46-4 (2021-08-03)").flags)
```

`sysrq()` returns `SysRq.DISABLE`, `SysRq.ENABLE`, or an `AllowedFunctions`
flag set for a partial selection.

## Errors

Failures raise `procsys.procfile.ProcError` or one of its subclasses:
`NotFoundError` when a file is absent (for example on an older kernel),
`PermissionDeniedError` when reading or writing without privileges, and
`ParseError` (also a `ValueError`) when the contents cannot be understood.

## Running the tests

```
pip install -e .[test]
pytest
```