"""
どこで: `engine.core` サブパッケージ。
何を: 2D 幾何プリミティブ・フレーム駆動（Tickable/FrameClock）・描画ウィンドウを提供。
なぜ: 計算と描画の基盤を構成し、上位層（clock/render/ui）から再利用可能にするため。
"""
