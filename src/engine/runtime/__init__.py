"""
どこで: `engine.runtime` サブパッケージ。
何を: ホストのフレームループと時計エンジンをつなぐ `ClockDriver` を提供。
なぜ: 時刻更新と再描画要求の管理をウィンドウ実装から切り離すため。
"""
