import logging

from seafood_order.logging_setup import configure_logging


def test_logs_are_written_to_the_configured_file(tmp_path):
    log_file = tmp_path / "nested" / "orders.log"
    logger = logging.getLogger("seafood_order")
    try:
        configure_logging(str(log_file), "DEBUG")
        logging.getLogger("seafood_order.cart").info("cart_clear lines=%d", 2)
        for handler in logger.handlers:
            handler.flush()

        content = log_file.read_text(encoding="utf-8")
        assert "INFO seafood_order.cart cart_clear lines=2" in content
    finally:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        logger.propagate = True
        logger.setLevel(logging.NOTSET)


def test_reconfiguring_replaces_handlers(tmp_path):
    logger = logging.getLogger("seafood_order")
    try:
        configure_logging(str(tmp_path / "a.log"))
        configure_logging(str(tmp_path / "b.log"))
        assert len(logger.handlers) == 1
    finally:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        logger.propagate = True
        logger.setLevel(logging.NOTSET)


def test_unwritable_log_path_falls_back_to_null_handler(tmp_path):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("", encoding="utf-8")
    logger = logging.getLogger("seafood_order")
    try:
        configure_logging(str(blocker / "orders.log"))

        assert [type(handler) for handler in logger.handlers] == [logging.NullHandler]
        logging.getLogger("seafood_order.cart").info("cart_clear lines=%d", 1)
    finally:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        logger.propagate = True
        logger.setLevel(logging.NOTSET)
