# Stream queues
# Large enough to never fill under the loads the lab is run with
QUEUE_CAPACITY = 10000

# Wall clock per drawn unit (gap / service time are drawn in "seconds",
# the simulation plays them back at 100 ms per unit)
ARRIVAL_SCALE_MS = 100
SERVICE_SCALE_MS = 100

# Max time (s) a blocked producer or the dispatcher sleeps before looking
# at the stop signal again
POLL_INTERVAL = 0.05

# Statistics
CONFIDENCE_LEVEL = 0.95

# Default scenario
ARRIVAL_RATE_1   = 5.0
SERVICE_RATE_1   = 10.0
ARRIVAL_RATE_2   = 3.0
SERVICE_RATE_2   = 8.0
TARGET_PROCESSED = 50

STREAM_IDS = (1, 2)

# Load sweep: arrival rates of both streams are multiplied by each factor
SWEEP_FACTORS = [0.25, 0.5, 0.75, 1.0, 1.25, 1.5]
SWEEP_TARGET  = 100
