"""Thread-safe maps, pools, segmented locks, condition variables and atomic values."""