allocation_run_description = """
Allocate every client-requested task to the best available workers and a phase.

Allocation is greedy and runs in client priority order: tasks of higher-priority clients
(weighted by the "Speed" priority) pick workers first. Tasks with no eligible worker are
reported in `warnings` and left unassigned.

### Request Body

- `clients`, `workers`, `tasks`, `rules`: Same shape as `/validation/run`.

- `priorities`: List of `Priority` objects (Optional):
    - `id`: Primary key of the priority

    - `name`: Name, e.g. "Speed", "Quality", "Cost Optimization"
    - `weight`: 0.0 - 1.0
    - `category`: fulfillment / fairness / efficiency / quality / custom

- `gateOnErrors`: When `true`, the records are validated first and the request is
  rejected with 409 if any error-severity finding remains. (Default: false)

- `useClassifier`: Ask the configured external rule classifier about rules whose text
  has no recognised keyword. (Default: false)

### Response

- `totalTasks`, `assignedTasks`, `unassignedTasks`
- `workerUtilization`: Duration units assigned per WorkerID
- `phaseDistribution`, `priorityDistribution`: Allocation counts per phase and per client priority
- `executedRules`: Names of the rules that detectably shaped an allocation
- `warnings`: Non-fatal messages, e.g. `Could not allocate task: <name> (<id>)`
- `allocations`: One entry per assigned task, with workers, phase, reasoning and confidence
"""
