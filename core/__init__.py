"""
核心業務邏輯層

這個 package 包含顯示控制的核心邏輯：
- DisplayManager：目前畫面、下一位、切換分類、切換顯示模式
- DisplayPointer：目前顯示狀態（mode, category, performer）
- Exceptions：業務異常分類
"""
