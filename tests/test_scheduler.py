from data_pipeline.cache import SeriesCache
from data_pipeline.scheduler import RefreshScheduler


def test_refresh_assets_continues_after_failure():
    def loader(asset):
        if asset == 'Bitcoin':
            raise RuntimeError("provider down")
        return [{'date': '2024-01-01', 'value': 1.0}]

    cache = SeriesCache(loader)
    RefreshScheduler(cache, timezone='UTC').refresh_assets(['Bitcoin', 'Gold'])
    assert cache.keys() == ['Gold']


def test_daily_refresh_job_is_registered():
    sched = RefreshScheduler(SeriesCache(lambda a: []), timezone='UTC')
    sched.start_daily_refresh(['Gold'])
    try:
        job = sched.scheduler.get_job('daily_refresh')
        assert job is not None
        assert job.args == (['Gold'],)
        sched.start_daily_refresh(['Gold', 'Kospi'])
        assert len(sched.scheduler.get_jobs()) == 1
    finally:
        sched.shutdown()
