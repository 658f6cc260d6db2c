from devops_monitor.services.sampling_loop import run

run()
