"""Names used by the trace event format and by build profiles written in it."""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Trace event format
# ---------------------------------------------------------------------------

SECTION_OTHER_DATA = "otherData"
SECTION_TRACE_EVENTS = "traceEvents"

EVENT_ARGUMENTS = "args"
EVENT_CATEGORY = "cat"
EVENT_DURATION = "dur"
EVENT_NAME = "name"
EVENT_PHASE = "ph"
EVENT_PROCESS_ID = "pid"
EVENT_THREAD_ID = "tid"
EVENT_TIMESTAMP = "ts"

PHASE_COMPLETE = "X"
PHASE_COUNTER = "C"
PHASE_INSTANT = "i"
# Deprecated spelling of PHASE_INSTANT, still written by older tools.
PHASE_INSTANT_LEGACY = "I"
PHASE_METADATA = "M"

METADATA_THREAD_NAME = "thread_name"
METADATA_THREAD_SORT_INDEX = "thread_sort_index"

# ---------------------------------------------------------------------------
# Build profile conventions
# ---------------------------------------------------------------------------

# Thread names, taken from the ``thread_name`` metadata event.
THREAD_CRITICAL_PATH = "Critical Path"
THREAD_GARBAGE_COLLECTOR = "Garbage Collector"
THREAD_MAIN = "Main Thread"
THREAD_MAIN_LEGACY_PREFIX = "grpc-command"

# Counter names
COUNTER_ACTION_COUNT = "action count"

# Categories
CAT_ACTION_PROCESSING = "action processing"
CAT_BUILD_PHASE_MARKER = "build phase marker"
CAT_GARBAGE_COLLECTION = "gc notification"
CAT_GENERAL_INFORMATION = "general information"
CAT_REMOTE_ACTION_CACHE_CHECK = "remote action cache check"
CAT_REMOTE_EXECUTION_PROCESS_WALL_TIME = "Remote execution process wall time"
CAT_REMOTE_EXECUTION_QUEUING_TIME = "Remote execution queuing time"
CAT_REMOTE_EXECUTION_SETUP = "Remote execution setup"

# Complete event names
COMPLETE_MAJOR_GARBAGE_COLLECTION = "major GC"

# Instant event names
INSTANT_FINISHING = "Finishing"
