"""
どこで: `engine.render` サブパッケージ。
何を: 1 フレームの描画出力型（Layer/ShapeList）と、それを pyglet で描く SegmentRenderer。
なぜ: エンジンの出力形式とウィンドウ描画の詳細を分離し、描画無しでも出力を検証できるようにするため。
"""
