def after_scenario(context, scenario):
    tracker = getattr(context, "tracker", None)
    if tracker is not None:
        tracker.stop()
    api = getattr(context, "api", None)
    if api is not None:
        api.close()
