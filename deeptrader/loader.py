"""Loader DeepTrader: сборка и жизненный цикл всех компонентов."""

from __future__ import annotations

from dataclasses import dataclass

from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode
from aiogram.fsm.storage.memory import MemoryStorage
from loguru import logger

from config.settings import AppSettings
from .handlers import register_routers
from .middlewares import (
    DatabaseMiddleware,
    ErrorsMiddleware,
    ThrottlingMiddleware,
    get_engine,
    get_session_maker,
    init_db,
)
from .services.core import SqlStore, StatsService, TelegramNotifier
from .services.monitor import (
    EvaluationPipeline,
    LiquidityLockChecker,
    MonitoringLoop,
    SecurityAnalyzer,
)
from .services.solana import PumpFunFeedClient, RugcheckClient, SolanaRpcClient
from .utils.cache import configure_cache


@dataclass(slots=True)
class Runtime:
    settings: AppSettings
    bot: Bot
    dp: Dispatcher
    rpc: SolanaRpcClient
    feed: PumpFunFeedClient
    rugcheck: RugcheckClient
    analyzer: SecurityAnalyzer
    pipeline: EvaluationPipeline
    monitor: MonitoringLoop
    stats: StatsService


def build_runtime(settings: AppSettings) -> Runtime:
    """Создаёт клиентов, ядро мониторинга и диспетчер бота."""

    configure_cache(settings.cache)
    get_engine(settings.database)
    session_maker = get_session_maker()

    bot = Bot(
        token=settings.telegram.token,
        default=DefaultBotProperties(parse_mode=ParseMode.HTML),
    )
    dp = Dispatcher(storage=MemoryStorage())

    rpc = SolanaRpcClient(settings.solana)
    feed = PumpFunFeedClient(settings.pumpfun)
    rugcheck = RugcheckClient(settings.rugcheck)
    store = SqlStore(session_maker)

    lock_checker = LiquidityLockChecker(
        rpc,
        timelock_programs=settings.solana.timelock_programs,
        token_program_id=settings.solana.token_program_id,
        account_size=settings.solana.token_account_size,
        batch_size=settings.solana.owner_batch_size,
        max_accounts=settings.solana.max_lock_accounts,
    )
    analyzer = SecurityAnalyzer(rpc, rugcheck, lock_checker, settings.filters)
    pipeline = EvaluationPipeline(
        analyzer,
        store,
        TelegramNotifier(bot, settings.telegram.channel_id),
        filters=settings.filters,
        alerts=settings.alerts,
    )
    monitor = MonitoringLoop(feed, pipeline, settings.monitor)
    stats = StatsService(store, monitor.controller, cache_ttl=settings.cache.ttl_seconds)

    register_routers(dp)
    _setup_middlewares(dp, DatabaseMiddleware(session_maker))
    # workflow data доступна хендлерам как именованные аргументы
    dp["stats_service"] = stats
    dp["analyzer"] = analyzer

    return Runtime(
        settings=settings,
        bot=bot,
        dp=dp,
        rpc=rpc,
        feed=feed,
        rugcheck=rugcheck,
        analyzer=analyzer,
        pipeline=pipeline,
        monitor=monitor,
        stats=stats,
    )


async def on_startup(runtime: Runtime) -> None:
    """Создание таблиц, открытие HTTP-сессий и запуск цикла мониторинга."""

    logger.info("DeepTrader стартует в окружении {env}", env=runtime.settings.environment)
    await init_db()
    await runtime.rpc.start()
    await runtime.feed.start()
    await runtime.rugcheck.start()
    if not runtime.settings.telegram.channel_id:
        logger.warning("TELEGRAM__CHANNEL_ID не задан, алерты доставляться не будут")
    await runtime.monitor.start()
    logger.info("========== DEEPTRADER MONITOR INITIALIZED ==========")


async def on_shutdown(runtime: Runtime) -> None:
    """Мягкое выключение сервиса."""

    await runtime.monitor.stop()
    await runtime.rpc.close()
    await runtime.feed.close()
    await runtime.rugcheck.close()
    await runtime.bot.session.close()
    logger.info("DeepTrader корректно остановлен")


def _setup_middlewares(dispatcher: Dispatcher, db_mw: DatabaseMiddleware) -> None:
    """Подключает throttling/DB/error middlewares."""

    throttling_mw = ThrottlingMiddleware(rate_limit=0.5, overrides={"info": 5.0})
    errors_mw = ErrorsMiddleware()

    dispatcher.message.middleware(throttling_mw)
    dispatcher.message.middleware(db_mw)
    dispatcher.message.middleware(errors_mw)

    logger.debug("Middleware стек активирован")


__all__ = ["Runtime", "build_runtime", "on_shutdown", "on_startup"]
