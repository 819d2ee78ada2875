validation_run_description = """
Validate client, worker and task records, and optionally the business rules that apply to them.

### Request Body

- `clients`: List of client records (one object per spreadsheet row):
    - `ClientID`: Primary key of the client

    - `ClientName`: Name of the client
    - `PriorityLevel`: Integer from 1 (lowest) to 5 (highest)
    - `RequestedTaskIDs`: Comma-separated TaskIDs, e.g. `"T1,T3"`
    - `GroupTag`: Free-form group label
    - `AttributesJSON`: JSON object string, e.g. `"{\\"region\\": \\"EU\\"}"`

- `workers`: List of worker records:
    - `WorkerID`: Primary key of the worker

    - `WorkerName`: Name of the worker
    - `Skills`: Comma-separated skill tags (matched case-insensitively)
    - `AvailableSlots`: JSON integer array of phases, e.g. `"[1,3,5]"`
    - `MaxLoadPerPhase`: Integer >= 1
    - `WorkerGroup`: Group label used by team rules
    - `QualificationLevel`: 1-10, or one of Junior / Mid-level / Senior / Lead / Principal / Architect

- `tasks`: List of task records:
    - `TaskID`: Primary key of the task

    - `TaskName`: Name of the task
    - `Category`: Free-form category
    - `Duration`: Integer >= 1 (phases of work)
    - `RequiredSkills`: Comma-separated skill tags
    - `PreferredPhases`: Range `"1-3"` or JSON array `"[2,4]"`
    - `MaxConcurrent`: Maximum number of workers on the task

- `rules`: List of business rules (Optional). When omitted, the co-run cycle and rule
  conflict checks are skipped and reported as passed.
    - `id`, `name`, `naturalLanguage`, `ruleType`, `isActive`

    - `tasks`: TaskIDs of a `co_run` rule
    - `taskId`, `allowedPhases`: target of a `phase_window` rule

### Response

- `totalErrors`, `totalWarnings`, `totalInfo`: Finding counts by severity
- `passedValidations`, `failedValidations`: Names of the checks, in run order
- `validationsPassed`: `true` when no error-severity findings remain
- `lastRun`: UTC timestamp of the run
- `errors`: The findings, each with `row` (-1 for sheet-level), `column`, `message`,
  `severity`, `suggestion`, `validationType` and `entity`
"""
